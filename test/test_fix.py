import unittest

import helpers

from latexast import match
from latexast.fix import BaseFix, BaseMultiStageFix, DontFixThisNode
from latexast.nodes import MacroNode
from latexast.parser import parse_latex
from latexast.printer import print_raw


class TestBaseFix(unittest.TestCase):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.maxDiff = None

    def test_preprocess_00(self):

        class MyFix(BaseFix):
            def fix_node(self, n, info):
                if match.macro(n, 'testmacro'):
                    return MacroNode('replacemacro')
                return None

        latex = r"""Test: \testmacro% a comment
Text and \textbf{bold text} and $\vec b$.
\begin{enumerate}
\item Hi there!  % here goes a comment
\end{enumerate}"""

        myfix = MyFix()
        tree = myfix.preprocess(parse_latex(latex))
        self.assertEqual(print_raw(tree), latex.replace('testmacro', 'replacemacro'))

    def test_preprocess_string_is_parsed(self):

        class MyFix(BaseFix):
            def fix_node(self, n, info):
                if match.macro(n, 'testmacro'):
                    return r'\newmacro {}'
                return None

        lpp = helpers.MockLPP()
        myfix = MyFix()
        lpp.install_fix(myfix)

        tree = myfix.preprocess(parse_latex(r"Test: \testmacro."))
        self.assertEqual(print_raw(tree), r"Test: \newmacro {}.")
        self.assertEqual(
            helpers.nodelist_to_d(tree.content[2:5]),
            [('macro', 'newmacro'), ('whitespace', ' '), ('group', [])]
        )

    def test_dont_fix_this_node(self):

        class MyFix(BaseFix):
            def fix_node(self, n, info):
                if match.macro(n, 'textbf'):
                    return r'\textsc{' + self.arg_latex(n, 0) + '}'
                return None

        tree = parse_latex(r"\textbf{a} ")
        # no argument list attached
        tree.content.append(MacroNode('textbf'))
        tree = MyFix().preprocess(tree)
        self.assertEqual(print_raw(tree), r"\textsc{a} \textbf")

    def test_node_get_arg(self):
        fix = BaseFix()
        n = parse_latex(r"\section[short]{Long}").content[0]
        self.assertIsNone(fix.node_get_arg(n, 0))
        self.assertEqual(fix.arg_latex(n, 1), 'short')
        self.assertEqual(fix.arg_latex(n, 2), 'Long')
        with self.assertRaises(RuntimeError):
            fix.node_get_arg(n, 3)
        with self.assertRaises(RuntimeError):
            fix.node_get_arg(n.args[2].content[0], 0)
        with self.assertRaises(DontFixThisNode):
            fix.node_get_arg(MacroNode('section'), 0)

    def test_preprocess_latex(self):

        class UpperFix(BaseFix):
            def fix_node(self, n, info):
                if match.macro(n, 'up'):
                    return '[' + self.preprocess_arg_latex(n, 0) + ']'
                return None

        myfix = UpperFix()
        tree = myfix.preprocess(parse_latex(r"\up{a\up{b}}", macros={'up': 'm'}))
        self.assertEqual(print_raw(tree), r"[a[b]]")
        self.assertEqual(myfix.preprocess_latex(None), '')

    def test_fix_tree_overrides_fix_node(self):

        class MyFix(BaseFix):
            def fix_tree(self, tree):
                return parse_latex('replaced')

            def fix_node(self, n, info):
                raise AssertionError("fix_node() should not be called")

        self.assertEqual(print_raw(MyFix().preprocess(parse_latex('x'))), 'replaced')

    def test_fix_name(self):
        self.assertEqual(BaseFix().fix_name(), 'latexast.fix.BaseFix')


class CountMeStageFix(BaseMultiStageFix):
    def __init__(self):
        super().__init__()

        self.number_of_countmes = 0
        self.stages_run = []

        self.add_stage(self.CountMacros(self))
        self.add_stage(self.ReplaceMacros(self))

    class CountMacros(BaseMultiStageFix.Stage):
        def stage_start(self):
            self.parent_fix.stages_run.append(self.stage_name())

        def fix_node(self, n, info):
            if match.macro(n, 'countme'):
                self.parent_fix.number_of_countmes += 1
            return None

    class ReplaceMacros(BaseMultiStageFix.Stage):
        def stage_start(self):
            self.parent_fix.stages_run.append(self.stage_name())

        def fix_node(self, n, info):
            if match.macro(n, 'numberofcountme'):
                return str(self.parent_fix.number_of_countmes)
            return None


class TestBaseMultiStageFix(unittest.TestCase):

    def test_stages(self):
        myfix = CountMeStageFix()
        lpp = helpers.MockLPP()
        lpp.install_fix(myfix)

        result = lpp.execute(r"\countme\ There are \numberofcountme{} countmes \countme.")
        self.assertEqual(result, r"\countme\ There are 2{} countmes \countme.")
        self.assertEqual(myfix.stages_run, ['CountMacros', 'ReplaceMacros'])

    def test_stages_get_lpp(self):
        myfix = CountMeStageFix()
        lpp = helpers.MockLPP()
        lpp.install_fix(myfix)
        self.assertTrue(all(s.lpp is lpp for s in myfix._fix_stages))

    def test_forgot_constructor(self):

        class BadFix(BaseMultiStageFix):
            def __init__(self):
                self.add_stage(BaseMultiStageFix.Stage(self))

        with self.assertRaises(RuntimeError):
            BadFix()


if __name__ == '__main__':
    helpers.test_main()
