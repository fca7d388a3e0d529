# The MIT License (MIT)
#
# Copyright (c) 2019 Philippe Faist
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#


r"""
Module that provides a helper for writing fixes that perform macro
substitutions with custom replacement code.
"""


import logging
logger = logging.getLogger(__name__)

from .macros import MacroDefinition, EnvironmentDefinition
from .signature import signature_from_argspec


class MacroSubstHelper:
    r"""
    Helper class that provides common functionality for fixes that replace
    certain macro invocations by a custom replacement.

    The `macros` argument is a dictionary ``{<macro-name>: <macro-info>}``
    where `<macro-info>` is either the replacement string (the macro then takes
    no arguments) or a dictionary with keys:

    - `signature`: the argument signature, e.g. ``'s o m'``;

    - `argspec`: alternatively, a legacy argspec string of characters ``*``,
      ``[`` and ``{`` (e.g. ``'*[{'``, equivalent to ``'s o m'``);

    - `repl`: the replacement code, in which ``#1``, ``#2``, ... refer to the
      arguments.

    The `environments` argument is a similar dictionary, where the replacement
    is given as `begin` and `end` code (``#n`` in `begin` refer to the
    arguments given after ``\begin{...}``), and where the additional key
    `group` tells whether to enclose the result in a LaTeX group (default
    `True`).
    """
    def __init__(self, macros={}, environments={}):
        super().__init__()

        self.macros = {
            name: self._make_macro_definition(name, cfg)
            for name, cfg in macros.items()
        }
        self.environments = {
            name: self._make_environment_definition(name, cfg)
            for name, cfg in environments.items()
        }

    def _cfg_signature(self, cfg):
        if 'signature' in cfg:
            return cfg['signature'] or ''
        return signature_from_argspec(cfg.get('argspec', '') or '')

    def _make_macro_definition(self, name, cfg):
        if isinstance(cfg, str):
            cfg = {'repl': cfg}
        return MacroDefinition(name, self._cfg_signature(cfg), cfg.get('repl', ''),
                               render_info=cfg.get('renderInfo'))

    def _make_environment_definition(self, name, cfg):
        if isinstance(cfg, str):
            cfg = {'begin': cfg}
        return EnvironmentDefinition(name, self._cfg_signature(cfg),
                                     cfg.get('begin', ''), cfg.get('end', ''),
                                     render_info=cfg.get('renderInfo'),
                                     group=cfg.get('group', True))

    def get_specs(self):
        r"""
        Return the signature tables that we need to declare to the parser, as
        expected by :py:meth:`latexast.fix.BaseFix.specs()`.
        """
        return dict(
            macros={name: d.table_entry() for name, d in self.macros.items()},
            environments={name: d.table_entry() for name, d in self.environments.items()},
        )

