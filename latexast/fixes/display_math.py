import logging
logger = logging.getLogger(__name__)

from latexast import lint

from latexast.fixes import BaseFix


class TexDisplayMath(BaseFix):
    r"""
    Replace TeX display math ``$$ ... $$`` by LaTeX display math
    ``\[ ... \]``.
    """

    def fix_tree(self, tree):
        return lint.fix_tex_display_math(tree)


class TexFontShaping(BaseFix):
    r"""
    Replace the TeX font switches ``\bf``, ``\it``, ``\tt``, etc. by the
    corresponding LaTeX switches ``\bfseries``, ``\itshape``, ``\ttfamily``,
    etc.
    """

    def fix_tree(self, tree):
        return lint.fix_tex_font_shaping_commands(tree)
