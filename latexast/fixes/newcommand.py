import re
import logging

logger = logging.getLogger(__name__)

from latexast import macros
from latexast.printer import print_raw
from latexast.replace import replace_node

from latexast.fixes import BaseFix


class Expand(BaseFix):
    r"""
    Detect custom macro and environment definitions in the preamble and apply
    them throughout the document.

    This fix detects custom macros and environments, for instance:

    .. code-block:: latex

        \newcommand\calE{\mathcal{E}}
        \newcommand\mycomments[1]{\textcolor{red}{#1}}
        \newcommand\myket[2][\big]{#1|{#2}#1\rangle} % \ket{\psi}, \ket[\Big]{\psi}
        \newenvironment{boldtext}{\bfseries}{}

    This fix then detects their use throughout the LaTeX document and replaces
    them with their respective substitutions.  Macro and environment arguments
    are processed as you would expect.  Expansions are themselves expanded
    again, up to a nesting depth of `max_depth`.

    By default, the corresponding ``\newcommand`` instructions are removed from
    the preamble.  If you'd like to keep them even though they have been
    substituted throughout the document, specify `leave_newcommand=True`.

    By default, the instructions ``\newcommand`` and ``\newenvironment`` are
    detected, while the instructions ``\renewcommand``, ``\providecommand``,
    ``\renewenvironment`` are ignored.  Such commands are often used to
    redefine LaTeX internals (``\renewcommand{\thepage}{...}``) which should
    not be substituted, nor their definitions removed.

    Arguments:

    - `leave_newcommand`: Set this to True to leave all macro and environment
      definition instructions (e.g., ``\newcommand``) in the preamble even if we
      substituted their replacements throughout the document.

      Definitions of blacklisted macros/environments and definitions using
      instructions that are not in `newcommand_cmds` are always left in place.

    - `newcommand_cmds`: The type of LaTeX command definition instructions to
      pay attention to.  This should be a list containing one or more elements
      in `('newcommand', 'renewcommand', 'providecommand',
      'DeclareRobustCommand', 'newenvironment', 'renewenvironment',
      'NewDocumentCommand', 'NewDocumentEnvironment', ...)`.

    - `macro_blacklist_patterns`, `environment_blacklist_patterns`: These
      arguments may be set to a list of regular expressions that specify which
      macro definitions and environment definitions should not be acted upon by
      this fix.  If a macro (respectively an environment) name matches any of
      the patterns (with :py:func:`re.search`), then it is left unchanged in the
      document and its definition is left in the preamble unaltered.

      For instance, with the fix configuration:

      .. code-block:: yaml

           - name: 'latexast.fixes.newcommand.Expand'
             config:
               newcommand_cmds: ['newcommand', 'renewcommand', 'newenvironment']
               macro_blacklist_patterns: ['^the', 'blablabla$']

      instructions such as ``\renewcommand{\theequation}{\roman{equation}}``
      would be left as-is in the output.

    - `max_depth`: maximal nesting of expansions, after which an
      :py:exc:`~latexast.errors.ExpansionDepthExceeded` error is raised.
    """

    def __init__(self, *,
                 leave_newcommand=False, newcommand_cmds=None,
                 macro_blacklist_patterns=None,
                 environment_blacklist_patterns=None,
                 max_depth=macros.DEFAULT_MAX_DEPTH):
        super().__init__()
        self.leave_newcommand = leave_newcommand
        if newcommand_cmds is None:
            self.newcommand_cmds = ('newcommand', 'newenvironment',)
        else:
            self.newcommand_cmds = tuple(newcommand_cmds)
        if macro_blacklist_patterns:
            self.macro_blacklist_patterns = [
                re.compile(x) for x in macro_blacklist_patterns
            ]
        else:
            self.macro_blacklist_patterns = [ ]
        if environment_blacklist_patterns:
            self.environment_blacklist_patterns = [
                re.compile(x) for x in environment_blacklist_patterns
            ]
        else:
            self.environment_blacklist_patterns = [ ]
        self.max_depth = max_depth

    def _is_name_blacklisted(self, name, blacklist_patterns):
        return any(rx.search(name) is not None for rx in blacklist_patterns)

    def _accepted(self, definitions, blacklist_patterns):
        accepted = []
        for d in definitions:
            if d.command not in self.newcommand_cmds:
                continue
            if self._is_name_blacklisted(d.name, blacklist_patterns):
                # blacklisted -- leave unchanged
                logger.debug("Not expanding blacklisted ‘%s’", d.name)
                continue
            accepted.append(d)
        return accepted

    def fix_tree(self, tree):

        definitions = self._accepted(macros.list_newcommands(tree),
                                     self.macro_blacklist_patterns)
        environments = self._accepted(macros.list_newenvironments(tree),
                                      self.environment_blacklist_patterns)

        logger.debug("Expanding macros %r and environments %r",
                     [d.name for d in definitions], [d.name for d in environments])

        macros.attach_definition_arguments(tree, definitions, environments)

        tree = macros.expand_macros(tree, definitions, environments,
                                    max_depth=self.max_depth)

        if self.leave_newcommand:
            return tree

        remove_nodes = set(id(d.node) for d in definitions + environments)

        def remove_definitions(n, info):
            if id(n) in remove_nodes:
                logger.debug("Removing ‘%s’", print_raw(n))
                return [] # won't need it any longer after all replacements
            return None

        return replace_node(tree, remove_definitions)
