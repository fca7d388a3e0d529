import unittest

import helpers

from latexast import match
from latexast.nodes import MacroNode, EnvironmentNode, TextNode, CommentNode, \
    ArgumentNode, MathNode, VerbatimNode, WhitespaceNode, ParbreakNode


class TestMatch(unittest.TestCase):

    def test_macro(self):
        m = MacroNode('textbf')
        self.assertTrue(match.macro(m))
        self.assertTrue(match.macro(m, 'textbf'))
        self.assertFalse(match.macro(m, 'emph'))
        self.assertFalse(match.macro(TextNode('textbf')))
        self.assertFalse(match.macro(None))
        self.assertTrue(match.any_macro(m))

    def test_environment(self):
        e = EnvironmentNode('itemize')
        self.assertTrue(match.environment(e, 'itemize'))
        self.assertFalse(match.environment(e, 'enumerate'))
        self.assertTrue(match.environment(VerbatimNode('verbatim', 'x'), 'verbatim'))
        self.assertFalse(match.any_environment(MacroNode('begin')))

    def test_string(self):
        self.assertTrue(match.string(TextNode('abc')))
        self.assertTrue(match.string(TextNode('abc'), 'abc'))
        self.assertFalse(match.string(TextNode('abc'), 'ab'))
        self.assertFalse(match.any_string(WhitespaceNode(' ')))

    def test_whitespace_like(self):
        self.assertTrue(match.whitespace_like(WhitespaceNode(' ')))
        self.assertTrue(match.whitespace_like(ParbreakNode()))
        self.assertTrue(match.whitespace_like(CommentNode('x')))
        self.assertFalse(match.whitespace_like(TextNode('x')))

    def test_math(self):
        self.assertTrue(match.math(MathNode([])))
        self.assertTrue(match.math(MathNode([]), display=False))
        self.assertFalse(match.math(MathNode([]), display=True))
        self.assertTrue(match.math(MathNode([], display=True), display=True))

    def test_blank_argument(self):
        self.assertTrue(match.blank_argument(ArgumentNode()))
        self.assertFalse(match.blank_argument(ArgumentNode([TextNode('x')], '{', '}')))

    def test_create_macro_matcher(self):
        is_heading = match.create_macro_matcher(['section', 'subsection'])
        self.assertTrue(is_heading(MacroNode('section')))
        self.assertTrue(is_heading(MacroNode('subsection'), 'subsection'))
        self.assertFalse(is_heading(MacroNode('subsection'), 'section'))
        self.assertFalse(is_heading(MacroNode('chapter')))
        self.assertFalse(is_heading(EnvironmentNode('section')))
        self.assertEqual(is_heading.names, frozenset(['section', 'subsection']))

    def test_matcher_from_table(self):
        is_known = match.create_macro_matcher({'a': {}, 'b': {'signature': 'm'}})
        self.assertTrue(is_known(MacroNode('b')))
        self.assertFalse(is_known(MacroNode('c')))

        is_single = match.create_environment_matcher('center')
        self.assertTrue(is_single(EnvironmentNode('center')))
        self.assertFalse(is_single(EnvironmentNode('c')))

    def test_combinators(self):
        m = match.any_of(match.comment, match.create_macro_matcher('par'))
        self.assertTrue(m(CommentNode()))
        self.assertTrue(m(MacroNode('par')))
        self.assertFalse(m(TextNode('par')))

        m = match.all_of(match.any_macro, match.negate(match.create_macro_matcher('par')))
        self.assertTrue(m(MacroNode('x')))
        self.assertFalse(m(MacroNode('par')))


if __name__ == '__main__':
    helpers.test_main()
