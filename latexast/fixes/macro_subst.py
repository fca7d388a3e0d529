import logging
logger = logging.getLogger(__name__)

from latexast import macros as latexmacros
from latexast.macro_subst_helper import MacroSubstHelper

from latexast.fixes import BaseFix


class Subst(BaseFix):
    r"""
    Define macros and environments that will be replaced by corresponding custom
    LaTeX code.

    Arguments:

      - `macros`: a dictionary of macro substitution rules ``{<macro-name>:
        <macro-info>, ...}``.  The key `<macro-name>` is the macro name without
        the leading backslash.

        The value `<macro-info>` is a dictionary ``{'signature': <signature>,
        'repl': <repl>}``, where `<signature>` specifies the argument structure
        of the macro (e.g. ``'s o m'``) and `<repl>` is the replacement
        string.  If `<macro-info>` is a string, then the string is interpreted
        as the `<repl>` and the macro does not expect any arguments.

        Instead of `signature`, you may give an `argspec` string of characters
        '*', '[', or '{' which indicate the nature of the macro arguments:

          - A '*' indicates a corresponding optional * in the LaTeX source
            (starred macro variant);

          - a '[' indicates an optional argument delimited in square brackets;
            and

          - a '{' indicates a mandatory argument.

        The argument values can be referred to in the replacement string
        `<repl>` using the syntax ``#n`` where `n` is the argument number,
        starting at 1.  An optional argument that was not given is replaced
        by its default value (as in ``O{default}``), or by nothing.

        For instance::

          macros={
            'includegraphics': {'argspec': '[{', 'repl': '<#2>'}
          }

        would replace all ``\includegraphics`` calls by the string
        ``<``\ `filename`\ ``>``, while ignoring any optional argument if it is
        present.

      - `environments`: a dictionary of environment substitution rules
        ``{<environment-name>: <environment-info>, ...}``.  The key
        `<environment-name>` is the name of the environment, i.e., what goes as
        argument to ``\begin{...}`` and ``\end{...}``.

        The `<environment-info>` is a dictionary ``{'signature': <signature>,
        'begin': <begin>, 'end': <end>, 'group': <group>}`` where `<signature>`
        (or `argspec`) specifies the structure of the arguments accepted
        immediately after ``\begin{<environment>}`` (as for ``{ccrl}`` in
        ``\begin{tabular}{ccrl}``).  The environment is replaced by the
        `<begin>` code, the environment body and the `<end>` code, enclosed in
        braces unless `<group>` is set to `False`.  The `<begin>` and `<end>`
        code must each be balanced LaTeX code; ``#n`` in `<begin>` refers to
        the environment arguments.

        .. note::

           For a starred version of an environment (like ``\begin{align*}``),
           the star is part of the environment name and NOT part of the
           signature.  I.e., you should specify ``environments={'align*':
           ...}`` and NOT ``environments={'align': {'argspec':'*',...}}``.

    Replacements are themselves searched for macros and environments to
    substitute, up to a nesting depth of `max_depth`.
    """

    def __init__(self, macros={}, environments={}, max_depth=latexmacros.DEFAULT_MAX_DEPTH):
        super().__init__()
        self.helper = MacroSubstHelper(macros, environments)
        self.max_depth = max_depth

    def specs(self):
        return dict(**self.helper.get_specs())

    def fix_tree(self, tree):
        return latexmacros.expand_macros(tree, self.helper.macros,
                                         self.helper.environments,
                                         max_depth=self.max_depth)
