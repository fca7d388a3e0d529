import unittest

import helpers

from latexast import lint as latexlint
from latexast.nodes import MacroNode
from latexast.parser import parse_latex
from latexast.printer import print_raw


class TestLintRules(unittest.TestCase):

    def test_no_def(self):
        s = "\\def\\foo{x}\n\\newcommand\\bar{y}\n"
        findings = latexlint.no_def(parse_latex(s))
        self.assertEqual(len(findings), 1)
        f = findings[0]
        self.assertEqual(f.rule, 'no-def')
        self.assertEqual(f.node.name, 'def')
        text = f.format(s)
        self.assertTrue(text.startswith('1:1: '))
        self.assertTrue(text.endswith(' [no-def]'))

    def test_position_on_later_line(self):
        s = "a\n\\gdef\\b{c}"
        f, = latexlint.no_def(parse_latex(s))
        self.assertTrue(f.format(s).startswith('2:1: '))
        self.assertTrue(f.format().startswith('@2: '))

    def test_finding_without_position(self):
        f = latexlint.Finding('no-def', 'message', MacroNode('def'))
        self.assertEqual(f.format("\\def"), 'message [no-def]')

    def test_no_tex_display_math(self):
        tree = parse_latex(r"$$x$$ and \[y\] and $z$")
        findings = latexlint.no_tex_display_math(tree)
        self.assertEqual([print_raw(f.node) for f in findings], ['$$x$$'])

    def test_fix_tex_display_math(self):
        tree = parse_latex(r"$$x$$ and $z$")
        self.assertEqual(print_raw(latexlint.fix_tex_display_math(tree)),
                         r"\[x\] and $z$")

    def test_tex_font_shaping(self):
        tree = parse_latex(r"{\bf a} {\it b} \textbf{c}")
        findings = latexlint.no_tex_font_shaping_commands(tree)
        self.assertEqual([f.node.name for f in findings], ['bf', 'it'])
        self.assertEqual(print_raw(latexlint.fix_tex_font_shaping_commands(tree)),
                         r"{\bfseries a} {\itshape b} \textbf{c}")

    def test_obsolete_packages(self):
        tree = parse_latex(r"\usepackage{a4wide,graphicx}\usepackage[T1]{fontenc}")
        findings = latexlint.no_obsolete_packages(tree)
        self.assertEqual(len(findings), 1)
        self.assertIn('a4wide', findings[0].message)
        self.assertEqual(findings[0].rule, 'obsolete-packages')

    def test_unsupported_math_macros(self):
        tree = parse_latex(r"$\alpha + \foo$ \baz")
        self.assertEqual(latexlint.report_unsupported_math_macros(tree), ['foo'])
        self.assertEqual(
            latexlint.report_unsupported_math_macros(tree, supported=['foo']),
            ['alpha']
        )

    def test_unsupported_math_macros_in_text_inside_math(self):
        tree = parse_latex(r"\begin{equation}\text{\qux}\end{equation}")
        self.assertEqual(latexlint.report_unsupported_math_macros(tree), ['qux'])


class TestLint(unittest.TestCase):

    def test_runs_all_rules(self):
        s = r"\def\x{1}$$\bf y$$"
        tree = parse_latex(s)
        findings = latexlint.lint(tree, latexlint.get_rules())
        self.assertEqual(sorted(f.rule for f in findings),
                         ['no-def', 'no-tex-display-math',
                          'no-tex-font-shaping-commands', 'unsupported-math-macros'])
        # the tree is left alone
        self.assertEqual(print_raw(tree), s)

    def test_get_rules(self):
        self.assertEqual(latexlint.get_rules(['no-def']), [latexlint.no_def])
        with self.assertRaises(ValueError):
            latexlint.get_rules(['nope'])


if __name__ == '__main__':
    helpers.test_main()
