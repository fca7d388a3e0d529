import unittest

import helpers

from latexast import macros
from latexast.errors import UnboundPlaceholder, ExpansionDepthExceeded, InvalidSignature
from latexast.macros import MacroDefinition, EnvironmentDefinition
from latexast.nodes import TextNode, PlaceholderNode
from latexast.parser import parse_latex, LatexParser
from latexast.printer import print_raw


def _invocation(s, **kwargs):
    return LatexParser(**kwargs).parse_nodes(s)[0]


class TestExpand(unittest.TestCase):

    def test_simple(self):
        d = MacroDefinition('hello', 'm', r'Hello, #1!')
        inv = _invocation(r'\hello{world}', macros={'hello': 'm'})
        self.assertEqual(print_raw(macros.expand(inv, d)), 'Hello, world!')

    def test_repeated_placeholder_is_not_aliased(self):
        d = MacroDefinition('twice', 'm', '#1,#1')
        inv = _invocation(r'\twice{\x}', macros={'twice': 'm'})
        result = macros.expand(inv, d)
        self.assertEqual(print_raw(result), r'\x,\x')
        self.assertEqual(result[0], result[2])
        self.assertIsNot(result[0], result[2])
        result[0].name = 'y'
        self.assertEqual(print_raw(result), r'\y,\x')
        # the invocation's own argument is untouched too
        self.assertEqual(print_raw(inv), r'\twice{\x}')

    def test_default_from_signature(self):
        d = MacroDefinition('ket', 'O{0} m', r'|#1,#2\rangle')
        inv = _invocation(r'\ket{1}', macros={'ket': 'O{0} m'})
        self.assertEqual(print_raw(macros.expand(inv, d)), r'|0,1\rangle')
        inv = _invocation(r'\ket[a]{1}', macros={'ket': 'O{0} m'})
        self.assertEqual(print_raw(macros.expand(inv, d)), r'|a,1\rangle')

    def test_default_override(self):
        d = MacroDefinition('ket', 'o m', r'|#1,#2\rangle', defaults=['z', None])
        inv = _invocation(r'\ket{1}', macros={'ket': 'o m'})
        self.assertEqual(print_raw(macros.expand(inv, d)), r'|z,1\rangle')

    def test_absent_optional_without_default(self):
        d = MacroDefinition('opt', 'o', r'<#1>')
        inv = _invocation(r'\opt', macros={'opt': 'o'})
        self.assertEqual(print_raw(macros.expand(inv, d)), '<>')

    def test_unbound_placeholder(self):
        d = MacroDefinition('bad', 'm', '#1#2')
        inv = _invocation(r'\bad{x}', macros={'bad': 'm'})
        with self.assertRaises(UnboundPlaceholder) as cm:
            macros.expand(inv, d)
        self.assertEqual(cm.exception.macroname, 'bad')
        self.assertEqual(cm.exception.number, 2)

    def test_invalid_signature(self):
        with self.assertRaises(InvalidSignature):
            MacroDefinition('bad', 'mx', 'x')

    def test_body_from_nodes(self):
        d = MacroDefinition('n', 'm', [TextNode('a#1b##')])
        inv = _invocation(r'\n{X}', macros={'n': 'm'})
        self.assertEqual(print_raw(macros.expand(inv, d)), 'aXb#')

    def test_parse_macro_substitutions(self):
        self.assertEqual(macros.parse_macro_substitutions([TextNode('a#1b##')]),
                         [TextNode('a'), PlaceholderNode(1), TextNode('b#')])


class TestExpandEnvironment(unittest.TestCase):

    def test_environment(self):
        d = EnvironmentDefinition('tagged', 'm', begin='<#1>', end='</>', group=False)
        env = _invocation(r'\begin{tagged}{b}text\end{tagged}',
                          environments={'tagged': 'm'})
        self.assertEqual(print_raw(macros.expand_environment(env, d)), '<b>text</>')

    def test_environment_group(self):
        d = EnvironmentDefinition('bold', '', begin=r'\bfseries ', end='')
        env = _invocation(r'\begin{bold}text\end{bold}')
        self.assertEqual(print_raw(macros.expand_environment(env, d)), r'{\bfseries text}')

    def test_placeholder_in_end_code(self):
        d = EnvironmentDefinition('tagged', 'm', begin='<#1>', end='</#1>')
        env = _invocation(r'\begin{tagged}{b}x\end{tagged}',
                          environments={'tagged': 'm'})
        with self.assertRaises(UnboundPlaceholder):
            macros.expand_environment(env, d)

        d = EnvironmentDefinition('tagged', 'm', begin='<#1>', end='</#1>',
                                  group=False, args_in_end=True)
        self.assertEqual(print_raw(macros.expand_environment(env, d)), '<b>x</b>')


class TestExpandMacros(unittest.TestCase):

    def test_nested_expansion(self):
        defs = [
            MacroDefinition('a', '', r'[\b{}]'),
            MacroDefinition('b', 'm', r'(#1)'),
        ]
        tree = parse_latex(r'\a{x} \b{y}', macros={'b': 'm'})
        result = macros.expand_macros(tree, defs)
        self.assertEqual(print_raw(result), r'[()]{x} (y)')

    def test_argument_contents_are_expanded(self):
        defs = {
            'a': MacroDefinition('a', '', 'A'),
            'b': MacroDefinition('b', 'm', '<#1>'),
        }
        tree = parse_latex(r'\b{\a}', macros={'b': 'm'})
        self.assertEqual(print_raw(macros.expand_macros(tree, defs)), '<A>')

    def test_depth_guard(self):
        defs = [
            MacroDefinition('ping', '', r'\pong'),
            MacroDefinition('pong', '', r'\ping'),
        ]
        tree = parse_latex(r'x \ping')
        with self.assertRaises(ExpansionDepthExceeded) as cm:
            macros.expand_macros(tree, defs, max_depth=8)
        self.assertEqual(len(cm.exception.chain), 9)
        self.assertEqual(cm.exception.chain[:4], ['ping', 'pong', 'ping', 'pong'])
        self.assertEqual(cm.exception.macroname, 'ping')

    def test_depth_is_per_branch(self):
        defs = [MacroDefinition('x', '', 'X')]
        tree = parse_latex(r'\x' * 20)
        self.assertEqual(print_raw(macros.expand_macros(tree, defs, max_depth=2)),
                         'X' * 20)

    def test_definitions_are_not_expanded_into(self):
        defs = [MacroDefinition('foo', '', 'FOO')]
        tree = parse_latex(r'\renewcommand\foo{\foo bar}\foo')
        self.assertEqual(print_raw(macros.expand_macros(tree, defs)),
                         r'\renewcommand\foo{\foo bar}FOO')

    def test_environments(self):
        envs = [EnvironmentDefinition('box', '', begin='[', end=']', group=False)]
        defs = [MacroDefinition('x', '', 'X')]
        tree = parse_latex(r'\begin{box}\x\begin{box}y\end{box}\end{box}')
        self.assertEqual(print_raw(macros.expand_macros(tree, defs, envs)), '[X[y]]')


class TestUserDefinedMacros(unittest.TestCase):

    def test_list_newcommands(self):
        tree = parse_latex(r'\newcommand{\a}{A}\renewcommand\bb[1]{B#1}'
                           r'\providecommand\cc[2][x]{#1#2}'
                           r'\NewDocumentCommand\dd{s m}{D}')
        found = [(d.name, d.command, d.signature) for d in macros.list_newcommands(tree)]
        self.assertEqual(found, [
            ('a', 'newcommand', ''),
            ('bb', 'renewcommand', 'm'),
            ('cc', 'providecommand', 'O{x} m'),
            ('dd', 'NewDocumentCommand', 's m'),
        ])

    def test_list_newenvironments(self):
        tree = parse_latex(r'\newenvironment{pp}[1]{(#1}{)}'
                           r'\NewDocumentEnvironment{qq}{o}{<}{>}')
        found = [(d.name, d.command, d.signature, d.args_in_end)
                 for d in macros.list_newenvironments(tree)]
        self.assertEqual(found, [
            ('pp', 'newenvironment', 'm', False),
            ('qq', 'NewDocumentEnvironment', 'o', True),
        ])

    def test_expand_user_defined_macros(self):
        s = r'\newcommand\hi[2][Hello]{#1, #2!}\hi{you} \hi[Bye]{me}'
        tree = parse_latex(s)
        result = macros.expand_user_defined_macros(tree)
        self.assertEqual(print_raw(result),
                         r'\newcommand\hi[2][Hello]{#1, #2!}Hello, you! Bye, me!')
        # the given tree is left alone
        self.assertEqual(print_raw(tree), s)

    def test_expand_user_defined_environments(self):
        s = (r'\newenvironment{paren}{(}{)}\begin{paren}x\end{paren}'
             r'\NewDocumentEnvironment{tagged}{m}{<#1>}{</#1>}\begin{tagged}{b}y\end{tagged}')
        result = macros.expand_user_defined_macros(parse_latex(s))
        self.assertEqual(print_raw(result),
                         r'\newenvironment{paren}{(}{)}{(x)}'
                         r'\NewDocumentEnvironment{tagged}{m}{<#1>}{</#1>}{<b>y</b>}')

    def test_recursive_definition(self):
        tree = parse_latex(r'\newcommand\foo{\foo}\foo')
        with self.assertRaises(ExpansionDepthExceeded):
            macros.expand_user_defined_macros(tree, max_depth=5)
        self.assertEqual(print_raw(tree), r'\newcommand\foo{\foo}\foo')

    def test_frac_placeholders(self):
        tree = parse_latex(r'\newcommand\half[1]{\frac#1 2}\half x')
        self.assertEqual(print_raw(macros.expand_user_defined_macros(tree)),
                         r'\newcommand\half[1]{\frac#1 2}\frac x 2')


if __name__ == '__main__':
    helpers.test_main()
