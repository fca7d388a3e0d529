import logging
import unittest

from latexast import preprocessor
from latexast.parser import LatexParser
from latexast.printer import print_raw


class MockLPP(preprocessor.LatexPreprocessor):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    def execute(self, latex):
        self.initialize()
        s = self.execute_string(latex, input_source='[test string]')
        self.finalize()
        return s


def parse_nodes(s, **kwargs):
    return LatexParser(**kwargs).parse_nodes(s)


def nodelist_to_d(nodelist):
    r"""
    Compact representation of a node list for comparisons in tests: each node
    becomes a tuple ``(nodetype, ...)``.
    """
    def get_obj(n):
        if isinstance(n, list):
            return [get_obj(x) for x in n]
        t = n.nodetype
        if t in ('text', 'whitespace', 'parbreak'):
            return (t, n.content)
        if t == 'comment':
            return (t, n.content, n.post_space)
        if t == 'placeholder':
            return (t, n.number)
        if t == 'macro':
            if n.args is None:
                return (t, n.name)
            return (t, n.name, [print_raw(a) for a in n.args])
        if t == 'environment':
            if n.args is None:
                return (t, n.name, get_obj(n.content))
            return (t, n.name, [print_raw(a) for a in n.args], get_obj(n.content))
        if t in ('group', 'root'):
            return (t, get_obj(n.content))
        if t == 'math':
            return (t, n.delimiters, get_obj(n.content))
        return (t, print_raw(n))

    return get_obj(nodelist)


class NodesComparer:
    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    def assert_nodelists_equal(self, nodelist, d):
        self.assertEqual(nodelist_to_d(nodelist), d)



def test_main():
    logging.basicConfig(level=logging.DEBUG)
    unittest.main()
