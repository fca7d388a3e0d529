import unittest

import helpers

from latexast.errors import MalformedArgument, InvalidSignature
from latexast.parser import LatexParser, parse_latex, find_verbatim_regions
from latexast.printer import print_raw


class TestRoundTrip(unittest.TestCase):

    documents = [
        r"Hello, world.",
        "Some text\n\nA new paragraph.\n",
        r"\section*{Introduction}\label{sec:intro} Text.",
        r"\section[Short]{A longer title} Text.",
        "Line with % a comment\n  continued here.",
        "Comment at the very end % no newline",
        r"Inline $x^2 + y_1$ and display \[ \int f \] and $$a$$ and \(b\).",
        "\\begin{itemize}\n  \\item First\n  \\item[(b)] Second\n\\end{itemize}\n",
        "\\begin{tabular}{cc}\n  a & b \\\\[2pt]\n  c & d\n\\end{tabular}",
        r"\verb|\foo{| and \verb*+a b+.",
        "\\begin{verbatim}\n\\not{parsed} % at all\n\\end{verbatim}",
        r"\newcommand{\foo}[2][x]{#1 and #2} \foo{y}",
        r"\textbf  {spaced}  \emph {out}",
        r"{\bf grouped {nested}} \\ \, \%",
        r"\includegraphics[width=3cm]{fig.pdf}",
        r"\frac12 \sqrt[3]{x}",
        r"\begin {itemize}\item a\end {itemize}",
        "\\begin {verbatim}\\x{\n\\end  {verbatim}",
    ]

    def test_round_trip(self):
        parser = LatexParser()
        for s in self.documents:
            with self.subTest(s=s):
                self.assertEqual(print_raw(parser.parse(s)), s)

    def test_positions(self):
        s = r"ab \textbf{cd} ef"
        tree = parse_latex(s)
        for n in tree.content:
            self.assertEqual(s[n.position[0]:n.position[1]], print_raw(n))


class TestParser(unittest.TestCase, helpers.NodesComparer):

    maxDiff = None

    def test_text_and_whitespace(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes("a b\n\nc"),
            [('text', 'a'), ('whitespace', ' '), ('text', 'b'),
             ('parbreak', '\n\n'), ('text', 'c')]
        )

    def test_macro_arguments(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes(r"\section*{Intro}"),
            [('macro', 'section', ['*', '', '{Intro}'])]
        )
        self.assert_nodelists_equal(
            helpers.parse_nodes(r"\section[S]{Long}"),
            [('macro', 'section', ['', '[S]', '{Long}'])]
        )

    def test_star_argument(self):
        m, = helpers.parse_nodes(r"\section*{Intro}")
        star = m.args[0]
        self.assertEqual([n.content for n in star.content], ['*'])
        self.assertTrue(m.args[1].is_blank())

    def test_single_token_arguments(self):
        m, = helpers.parse_nodes(r"\frac12")
        self.assertEqual([print_raw(a.content) for a in m.args], ['1', '2'])

    def test_unknown_macro_has_no_args(self):
        m, g = helpers.parse_nodes(r"\foo{x}")
        self.assertIsNone(m.args)
        self.assertEqual(g.nodetype, 'group')

    def test_custom_macros(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes(r"\foo[a]{b}c", macros={'foo': 'o m'}),
            [('macro', 'foo', ['[a]', '{b}']), ('text', 'c')]
        )

    def test_optional_args_do_not_backtrack(self):
        m, = helpers.parse_nodes(r"\foo[a]", macros={'foo': 'o m'})
        self.assertEqual(print_raw(m.args[0].content), 'a')
        self.assertEqual(m.args[1].content[0].nodetype, 'error')
        self.assertEqual(print_raw(m), r"\foo[a]")

    def test_left_to_right(self):
        # \textbf takes the bare token \emph as its argument
        nodes = helpers.parse_nodes(r"\textbf\emph{x}")
        self.assertEqual(len(nodes), 2)
        textbf = nodes[0]
        self.assertEqual(textbf.args[0].content[0].name, 'emph')
        self.assertEqual(nodes[1].nodetype, 'group')
        self.assertEqual(print_raw(nodes), r"\textbf\emph{x}")

    def test_whitespace_before_argument(self):
        m, = helpers.parse_nodes("\\textbf \n {x}")
        self.assertEqual(m.args[0].pre_space, " \n ")
        self.assertEqual(print_raw(m.args[0].content), 'x')

    def test_no_leading_whitespace(self):
        nodes = helpers.parse_nodes(r"a\\ *b")
        self.assertEqual(nodes[1].name, '\\')
        self.assertTrue(nodes[1].args[0].is_blank())
        self.assertEqual(print_raw(nodes), r"a\\ *b")

    def test_environment(self):
        env, = helpers.parse_nodes(r"\begin{tabular}{cc}a&b\end{tabular}")
        self.assertEqual(env.name, 'tabular')
        self.assertEqual([print_raw(a) for a in env.args], ['', '{cc}'])
        self.assertEqual(print_raw(env.content), 'a&b')

    def test_math(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes(r"$x$ \[y\]"),
            [('math', ('$', '$'), [('text', 'x')]),
             ('whitespace', ' '),
             ('math', ('\\[', '\\]'), [('text', 'y')])]
        )
        m1, _, m2 = helpers.parse_nodes(r"$x$ $$y$$")
        self.assertFalse(m1.display)
        self.assertTrue(m2.display)

    def test_comment(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes("a% c\n  b"),
            [('text', 'a'), ('comment', ' c', '\n  '), ('text', 'b')]
        )

    def test_comment_before_blank_line(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes("a% c\n\nb"),
            [('text', 'a'), ('comment', ' c', ''), ('parbreak', '\n\n'), ('text', 'b')]
        )

    def test_placeholders(self):
        self.assert_nodelists_equal(
            helpers.parse_nodes(r"#1 and {#2}##"),
            [('placeholder', 1), ('whitespace', ' '), ('text', 'and'),
             ('whitespace', ' '), ('group', [('placeholder', 2)]), ('text', '##')]
        )

    def test_verbatim(self):
        v, = helpers.parse_nodes(r"\verb|a{b|")
        self.assertEqual((v.nodetype, v.content, v.delimiter, v.star),
                         ('verb', 'a{b', '|', False))

        env, = helpers.parse_nodes("\\begin{verbatim}\\x{ % y\n\\end{verbatim}")
        self.assertEqual((env.nodetype, env.name, env.content),
                         ('verbatim', 'verbatim', '\\x{ % y\n'))

    def test_space_after_begin(self):
        env, = helpers.parse_nodes("\\begin {itemize}\\item a\\end\n{itemize}")
        self.assertEqual((env.nodetype, env.name), ('environment', 'itemize'))
        self.assertEqual((env.begin_space, env.end_space), (' ', '\n'))
        self.assertEqual(print_raw(env.content), r'\item a')
        self.assertEqual(env, helpers.parse_nodes(r"\begin{itemize}\item a\end{itemize}")[0])

        env, = helpers.parse_nodes("\\begin {verbatim}\\x{ % y\n\\end {verbatim}")
        self.assertEqual((env.nodetype, env.content), ('verbatim', '\\x{ % y\n'))
        self.assertEqual((env.begin_space, env.end_space), (' ', ' '))

        env.name = 'Verbatim'
        self.assertEqual(print_raw(env), "\\begin {Verbatim}\\x{ % y\n\\end {Verbatim}")

    def test_verbatim_regions_skip_comments(self):
        regions = find_verbatim_regions("% \\verb|x|\n\\verb+y+")
        self.assertEqual([r.content for r in regions.values()], ['y'])

    def test_strict_mode(self):
        parser = LatexParser(tolerant_parsing=False)
        with self.assertRaises(MalformedArgument) as cm:
            parser.parse(r"\textbf")
        self.assertEqual(cm.exception.macroname, 'textbf')

    def test_tolerant_mode(self):
        tree = parse_latex(r"\textbf")
        m, = tree.content
        self.assertEqual(m.args[0].content[0].nodetype, 'error')
        self.assertEqual(print_raw(tree), r"\textbf")

    def test_packages(self):
        parser = LatexParser(packages=['latex2e'])
        m, = parser.parse_nodes(r"\eqref")
        self.assertIsNone(m.args)
        parser = LatexParser(packages=['latex2e', 'amsmath'])
        m, = parser.parse_nodes(r"\eqref{x}")
        self.assertEqual(print_raw(m.args[0]), '{x}')

    def test_invalid_table_signature(self):
        with self.assertRaises(InvalidSignature):
            LatexParser(macros={'foo': 'm x'})

    def test_render_info(self):
        m, = helpers.parse_nodes(r"\section{A}")
        self.assertTrue(m.render_info.get('breakAround'))

    def test_definition_names_get_no_arguments(self):
        m, = helpers.parse_nodes(r"\renewcommand\section{x}")
        self.assertIsNone(m.args[1].content[0].args)


if __name__ == '__main__':
    helpers.test_main()
