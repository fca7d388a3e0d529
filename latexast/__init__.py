r"""
Parse LaTeX source into a typed syntax tree, and match, visit, rewrite,
expand and print that tree.

The main entry points live in the submodules :py:mod:`latexast.parser`,
:py:mod:`latexast.match`, :py:mod:`latexast.visit`,
:py:mod:`latexast.replace`, :py:mod:`latexast.macros` and
:py:mod:`latexast.printer`.
"""

__version__ = '0.3.0'
