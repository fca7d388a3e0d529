r"""
Fixes that can be installed in the preprocessor.  See
:py:class:`latexast.fix.BaseFix` for writing your own.
"""

from ..fix import DontFixThisNode, BaseFix, BaseMultiStageFix
