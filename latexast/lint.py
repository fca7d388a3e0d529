r"""
Lint rules reporting questionable LaTeX constructs.

A rule is a function ``rule(tree)`` that returns a list of
:py:class:`Finding` instances.  :py:func:`lint` runs several rules on a
tree.  The rules known by name to the command line tool are listed in
:py:data:`rules`.
"""

import collections
import logging

logger = logging.getLogger(__name__)

from . import nodes as latexnodes
from . import match
from .printer import print_raw
from .replace import replace_node
from .visit import visit


class Finding(collections.namedtuple('Finding', ('rule', 'message', 'node'))):
    r"""
    A problem reported by a lint rule: the `rule` name, a human-readable
    `message`, and the offending `node` (whose `position`, if set, locates
    the problem in the source).
    """
    __slots__ = ()

    def format(self, source=None):
        r"""
        Return a one-line description of the finding.  If the original
        `source` string is given, the position is reported as line and
        column numbers.
        """
        where = ''
        pos = self.node.position if self.node is not None else None
        if pos is not None:
            if source is not None:
                line = source.count('\n', 0, pos[0]) + 1
                col = pos[0] - (source.rfind('\n', 0, pos[0]) + 1) + 1
                where = '{}:{}: '.format(line, col)
            else:
                where = '@{}: '.format(pos[0])
        return '{}{} [{}]'.format(where, self.message, self.rule)


def lint(tree, rules):
    r"""
    Run each of the `rules` (a list of rule functions) on `tree` and return
    all findings, rule by rule.  Each rule is given its own copy of the tree,
    so that a rule cannot affect the others or the caller's tree.
    """
    findings = []
    for rule in rules:
        findings += rule(latexnodes.clone(tree))
    logger.debug("Lint found %d problems", len(findings))
    return findings


def _visit_matching(tree, test, make_finding):
    findings = []

    def callback(node, info):
        f = make_finding(node, info)
        if f is not None:
            findings.append(f)

    visit(tree, callback, test=test)
    return findings


_is_def = match.create_macro_matcher(['def', 'gdef', 'edef', 'xdef'])


def no_def(tree):
    r"""
    Report uses of ``\def`` (and ``\gdef``, ``\edef``, ``\xdef``).  Use
    ``\newcommand`` or ``\NewDocumentCommand`` instead.
    """
    return _visit_matching(tree, _is_def, lambda node, info: Finding(
        'no-def',
        "Do not use ‘\\{}’ to define a macro; use ‘\\newcommand’ or "
        "‘\\NewDocumentCommand’ instead".format(node.name),
        node
    ))


def _is_tex_display_math(node):
    return match.math(node, display=True) and node.delimiters[0] == '$$'


def no_tex_display_math(tree):
    r"""
    Report TeX display math ``$$...$$``; LaTeX's ``\[...\]`` should be
    preferred.  See :py:func:`fix_tex_display_math`.
    """
    return _visit_matching(tree, _is_tex_display_math, lambda node, info: Finding(
        'no-tex-display-math',
        "Avoid using $$...$$ for display math; prefer \\[...\\]",
        node
    ))


def fix_tex_display_math(tree):
    r"""
    Rewrite every ``$$...$$`` of `tree` as ``\[...\]``.  Returns the new tree.
    """
    def callback(node, info):
        if not _is_tex_display_math(node):
            return None
        return latexnodes.MathNode(node.content, display=True,
                                   delimiters=('\\[', '\\]'),
                                   position=node.position,
                                   render_info=dict(node.render_info))

    return replace_node(tree, callback)


#: TeX font switches and their LaTeX replacements.
tex_font_shaping_replacements = {
    'bf': 'bfseries',
    'it': 'itshape',
    'rm': 'rmfamily',
    'sc': 'scshape',
    'sf': 'sffamily',
    'sl': 'slshape',
    'tt': 'ttfamily',
}

_is_tex_font_switch = match.create_macro_matcher(tex_font_shaping_replacements)


def no_tex_font_shaping_commands(tree):
    r"""
    Report the TeX font switches ``\bf``, ``\it``, etc.  See
    :py:func:`fix_tex_font_shaping_commands`.
    """
    return _visit_matching(tree, _is_tex_font_switch, lambda node, info: Finding(
        'no-tex-font-shaping-commands',
        "Replace ‘{}’ with ‘\\{}’".format(print_raw(node),
                                         tex_font_shaping_replacements[node.name]),
        node
    ))


def fix_tex_font_shaping_commands(tree):
    r"""
    Replace the TeX font switches of `tree` by their LaTeX counterparts.
    Returns the new tree.
    """
    def callback(node, info):
        if not _is_tex_font_switch(node):
            return None
        return latexnodes.MacroNode(tex_font_shaping_replacements[node.name],
                                    position=node.position)

    return replace_node(tree, callback)


#: Obsolete packages and what to use instead.
obsolete_packages = {
    'a4': "Use ‘geometry’ or ‘typearea’ instead",
    'a4wide': "Use ‘geometry’ or ‘typearea’ instead",
    'anysize': "Use ‘geometry’ or ‘typearea’ instead",
    'caption2': "Use ‘caption’ instead",
    'doublespace': "Use ‘setspace’ instead",
    'epsfig': "Use ‘graphicx’ instead",
    'fancyheadings': "Use ‘fancyhdr’ instead",
    'glossary': "Use ‘glossaries’ instead",
    'here': "Use ‘float’ instead",
    'isolatin1': "Use ‘inputenc’ instead",
    'mathptm': "Use ‘mathptmx’ instead",
    'palatino': "Use ‘mathpazo’ instead",
    'subfigure': "Use ‘subfig’ or ‘subcaption’ instead",
    't1enc': "Use ‘\\usepackage[T1]{fontenc}’ instead",
    'times': "Use ‘mathptmx’ instead",
    'vmargin': "Use ‘geometry’ or ‘typearea’ instead",
}

_is_usepackage = match.create_macro_matcher(['usepackage', 'RequirePackage'])


def no_obsolete_packages(tree):
    r"""
    Report ``\usepackage`` of packages listed in
    :py:data:`obsolete_packages`.
    """
    findings = []

    def callback(node, info):
        if not node.args:
            return
        names = node.args[-1]
        if names.is_blank():
            return
        for pkg in print_raw(names.content).split(','):
            pkg = pkg.strip()
            if pkg in obsolete_packages:
                findings.append(Finding(
                    'obsolete-packages',
                    "Inclusion of obsolete package ‘{}’. {}."
                    .format(pkg, obsolete_packages[pkg]),
                    node
                ))

    visit(tree, callback, test=_is_usepackage)
    return findings


#: Math mode macros that common web renderers (e.g. KaTeX) understand.
default_supported_math_macros = frozenset([
    # greek letters
    'alpha', 'beta', 'gamma', 'delta', 'epsilon', 'varepsilon', 'zeta', 'eta',
    'theta', 'vartheta', 'iota', 'kappa', 'lambda', 'mu', 'nu', 'xi', 'pi',
    'varpi', 'rho', 'varrho', 'sigma', 'varsigma', 'tau', 'upsilon', 'phi',
    'varphi', 'chi', 'psi', 'omega', 'Gamma', 'Delta', 'Theta', 'Lambda', 'Xi',
    'Pi', 'Sigma', 'Upsilon', 'Phi', 'Psi', 'Omega',
    # structures
    'frac', 'dfrac', 'tfrac', 'sqrt', 'binom', 'over', 'left', 'right',
    'big', 'Big', 'bigg', 'Bigg', 'middle',
    # operators
    'sum', 'prod', 'int', 'iint', 'oint', 'lim', 'limsup', 'liminf', 'sup',
    'inf', 'max', 'min', 'log', 'ln', 'exp', 'sin', 'cos', 'tan', 'det',
    'dim', 'ker', 'deg', 'arg', 'operatorname', 'bigcup', 'bigcap', 'bigoplus',
    'bigotimes',
    # relations and symbols
    'le', 'leq', 'ge', 'geq', 'neq', 'ne', 'approx', 'sim', 'simeq', 'cong',
    'equiv', 'propto', 'in', 'notin', 'ni', 'subset', 'subseteq', 'supset',
    'supseteq', 'cup', 'cap', 'setminus', 'times', 'cdot', 'cdots', 'ldots',
    'dots', 'vdots', 'ddots', 'pm', 'mp', 'otimes', 'oplus', 'circ', 'infty',
    'partial', 'nabla', 'forall', 'exists', 'neg', 'land', 'lor', 'to',
    'rightarrow', 'leftarrow', 'Rightarrow', 'Leftarrow', 'leftrightarrow',
    'Leftrightarrow', 'mapsto', 'langle', 'rangle', 'lvert', 'rvert', 'lVert',
    'rVert', 'vert', 'Vert', 'mid', 'emptyset', 'varnothing', 'hbar', 'ell',
    'dagger', 'prime', 'perp', 'parallel', 'quad', 'qquad',
    # accents and fonts
    'hat', 'widehat', 'tilde', 'widetilde', 'bar', 'overline', 'underline',
    'vec', 'dot', 'ddot', 'mathbf', 'mathrm', 'mathit', 'mathcal', 'mathbb',
    'mathfrak', 'mathsf', 'mathtt', 'boldsymbol', 'text', 'textrm', 'textbf',
    'textit', 'mbox',
    # spacing and escapes
    ',', ';', ':', '!', ' ', '\\', '{', '}', '_', '%', '&', '#', '$',
    'label', 'tag', 'nonumber', 'notag',
])


def unsupported_math_macros(supported=default_supported_math_macros):
    r"""
    Return a rule reporting the macros used in math mode that are not in
    `supported` (a collection of macro names).
    """
    is_supported = match.create_macro_matcher(supported)

    def rule(tree):
        return _visit_matching(tree, match.any_macro, lambda node, info: (
            Finding('unsupported-math-macros',
                    "Macro ‘\\{}’ is not supported in math mode".format(node.name),
                    node)
            if info.context.has_math_mode_ancestor and not is_supported(node)
            else None
        ))

    return rule


def report_unsupported_math_macros(tree, supported=default_supported_math_macros):
    r"""
    Return the names of the macros used in math mode in `tree` that are not
    in `supported`, in document order (with repetitions).
    """
    return [f.node.name for f in unsupported_math_macros(supported)(tree)]


#: Rules by name, as used in the ``lint:`` section of the configuration.
rules = {
    'no-def': no_def,
    'no-tex-display-math': no_tex_display_math,
    'no-tex-font-shaping-commands': no_tex_font_shaping_commands,
    'obsolete-packages': no_obsolete_packages,
    'unsupported-math-macros': unsupported_math_macros(),
}


def get_rules(names=None):
    r"""
    Return the rule functions for the given rule `names`, or all rules if
    `names` is `None`.  Raises `ValueError` for unknown names.
    """
    if names is None:
        return list(rules.values())
    try:
        return [rules[n] for n in names]
    except KeyError as e:
        raise ValueError("Unknown lint rule ‘{}’".format(e.args[0]))
