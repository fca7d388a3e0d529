r"""
Parse LaTeX source into a syntax tree.

Tokenizing is done by :py:mod:`pylatexenc.latexwalker`, configured with an
empty context so that every macro and environment is read without arguments.
The pylatexenc nodes are then converted into :py:mod:`latexast.nodes`, and
arguments are attached according to the signature tables of the parser (see
:py:mod:`latexast.arguments`).

The conversion accounts for every character of the input: text between
tokenizer nodes is recovered from the source string itself, so that
``print_raw(parse(s)) == s`` for any well-formed input.

Verbatim regions (``\verb|...|`` and environments such as ``verbatim``) are
located before tokenizing and hidden from pylatexenc; they become
:py:class:`~latexast.nodes.VerbNode` and
:py:class:`~latexast.nodes.VerbatimNode` instances holding the raw text.
"""

import re
import collections
import logging

logger = logging.getLogger(__name__)

from pylatexenc import latexwalker
from pylatexenc.macrospec import MacroSpec, EnvironmentSpec, SpecialsSpec, \
    LatexContextDb

from . import nodes as latexnodes
from . import packages as latexpackages
from .arguments import attach_arguments
from .catcode import reparse_at_letter_and_expl3_regions
from .signature import parse_signature


default_verbatim_environments = ('verbatim', 'verbatim*', 'lstlisting', 'minted',
                                 'comment')

default_verb_macros = ('verb',)


_VerbatimRegion = collections.namedtuple(
    '_VerbatimRegion',
    ('start', 'end', 'kind', 'name', 'content', 'star', 'delimiter',
     'begin_space', 'end_space')
)


def _make_scan_rx(verb_macros):
    verb_names = '|'.join(re.escape(m) for m in sorted(verb_macros, key=len, reverse=True))
    if not verb_names:
        verb_names = r'(?!)'
    return re.compile(
        r'\\(?:(?P<verbname>' + verb_names + r')(?P<verbstar>\*?)'
        r'(?P<verbdelim>[^a-zA-Z\s*])'
        r'|begin(?P<envspace>\s*)\{(?P<envname>[^{}]+)\})'
        r'|\\.'
        r'|%[^\n]*',
        flags=re.DOTALL
    )


def find_verbatim_regions(s, verbatim_environments=default_verbatim_environments,
                          verb_macros=default_verb_macros):
    r"""
    Locate the verbatim regions of `s`, skipping over comments and escaped
    characters.  Returns a dictionary mapping the start offset of each region
    to a named tuple with fields `start`, `end`, `kind` (``'verb'`` or
    ``'environment'``), `name`, `content`, `star` and `delimiter`.

    A ``\begin{verbatim}`` without a matching ``\end{verbatim}``, or a
    ``\verb`` whose closing delimiter is not on the same line, is not
    treated as verbatim.
    """
    rx = _make_scan_rx(verb_macros)
    regions = {}
    pos = 0
    while True:
        m = rx.search(s, pos)
        if m is None:
            break

        envname = m.group('envname')
        if envname is not None and envname in verbatim_environments:
            rx_end = re.compile(r'\\end(\s*)\{' + re.escape(envname) + r'\}')
            mend = rx_end.search(s, m.end())
            if mend is not None:
                regions[m.start()] = _VerbatimRegion(
                    start=m.start(), end=mend.end(), kind='environment',
                    name=envname, content=s[m.end():mend.start()],
                    star=False, delimiter=None,
                    begin_space=m.group('envspace'), end_space=mend.group(1),
                )
                pos = mend.end()
                continue

        verbname = m.group('verbname')
        if verbname is not None:
            delim = m.group('verbdelim')
            iend = s.find(delim, m.end())
            inl = s.find('\n', m.end())
            if iend != -1 and (inl == -1 or iend < inl):
                regions[m.start()] = _VerbatimRegion(
                    start=m.start(), end=iend+1, kind='verb',
                    name=verbname, content=s[m.end():iend],
                    star=bool(m.group('verbstar')), delimiter=delim,
                    begin_space=None, end_space=None,
                )
                pos = iend + 1
                continue
            logger.warning("Unterminated \\%s at position %d", verbname, m.start())

        pos = m.end()

    return regions


def _mask_verbatim_regions(s, regions):
    # replace each region by a brace group of the same length, so that the
    # tokenizer sees a single opaque node at the same position
    if not regions:
        return s
    parts = []
    last = 0
    for start in sorted(regions):
        r = regions[start]
        parts.append(s[last:r.start])
        parts.append('{' + 'x'*(r.end - r.start - 2) + '}')
        last = r.end
    parts.append(s[last:])
    return ''.join(parts)


_rx_chars = re.compile(
    r'(?P<space>\s+)'
    r'|(?P<placeholder>#[1-9])'
    r'|(?P<text>(?:##|#(?![1-9])|[^\s#])+)'
)

_rx_comment = re.compile(r'%([^\r\n]*)(\r?\n(?![ \t]*\r?\n)[ \t]*)?')

_rx_begin = re.compile(r'\\begin(\s*)\{[^{}]*\}')

_rx_end = re.compile(r'\\end(\s*)\{[^{}]*\}')


class _NodeConverter:
    r"""
    Convert pylatexenc nodes into :py:mod:`latexast.nodes`, reading text and
    whitespace from the original source string `s`.
    """
    def __init__(self, s, verbatim_regions):
        super().__init__()
        self.s = s
        self.verbatim_regions = verbatim_regions

    def convert_nodelist(self, nodelist, start, end):
        result = []
        p = start
        for n in nodelist:
            if n is None or n.pos is None:
                continue
            if n.isNodeType(latexwalker.LatexCharsNode):
                # read from the source along with any surrounding whitespace
                continue
            newnode, newp = self.convert_node(n)
            if newnode is None:
                continue
            self.add_chars(result, p, n.pos)
            result.append(newnode)
            p = newp
        self.add_chars(result, p, end)
        return result

    def add_chars(self, result, start, end):
        for m in _rx_chars.finditer(self.s, start, end):
            position = m.span()
            space = m.group('space')
            if space is not None:
                if space.count('\n') >= 2:
                    result.append(latexnodes.ParbreakNode(space, position=position))
                else:
                    result.append(latexnodes.WhitespaceNode(space, position=position))
            elif m.group('placeholder') is not None:
                result.append(latexnodes.PlaceholderNode(int(m.group('placeholder')[1:]),
                                                         position=position))
            else:
                result.append(latexnodes.TextNode(m.group('text'), position=position))

    def convert_node(self, n):
        r"""
        Return ``(node, end)`` where `end` is the source offset up to which
        the returned node accounts for the input.  Returns ``(None, None)``
        for nodes that are read as plain characters.
        """
        s = self.s
        nend = n.pos + n.len

        if n.isNodeType(latexwalker.LatexCommentNode):
            m = _rx_comment.match(s, n.pos)
            return latexnodes.CommentNode(
                m.group(1),
                m.group(2) or '',
                position=(n.pos, m.end())
            ), m.end()

        if n.isNodeType(latexwalker.LatexMacroNode):
            end = n.pos + 1 + len(n.macroname)
            return latexnodes.MacroNode(n.macroname, position=(n.pos, end)), end

        if n.isNodeType(latexwalker.LatexGroupNode):
            region = self.verbatim_regions.get(n.pos)
            if region is not None:
                return self.make_verbatim_node(region), region.end
            d0, d1 = getattr(n, 'delimiters', None) or ('{', '}')
            cend = nend - len(d1) if s.startswith(d1, nend - len(d1)) \
                and nend - len(d1) > n.pos else nend
            return latexnodes.GroupNode(
                self.convert_nodelist(n.nodelist, n.pos + len(d0), cend),
                position=(n.pos, nend)
            ), nend

        if n.isNodeType(latexwalker.LatexMathNode):
            d0, d1 = n.delimiters
            cend = nend - len(d1) if s.startswith(d1, nend - len(d1)) \
                and nend - len(d1) >= n.pos + len(d0) else nend
            return latexnodes.MathNode(
                self.convert_nodelist(n.nodelist, n.pos + len(d0), cend),
                display=(n.displaytype == 'display'),
                delimiters=(d0, d1),
                position=(n.pos, nend)
            ), nend

        if n.isNodeType(latexwalker.LatexEnvironmentNode):
            mbegin = _rx_begin.match(s, n.pos)
            cstart, begin_space = n.pos, ''
            if mbegin is not None:
                cstart, begin_space = mbegin.end(), mbegin.group(1)
            cend, end_space = nend, ''
            iend = s.rfind('\\end', cstart, nend)
            if iend != -1:
                mend = _rx_end.match(s, iend)
                if mend is not None and mend.end() == nend:
                    cend, end_space = iend, mend.group(1)
            return latexnodes.EnvironmentNode(
                n.environmentname,
                self.convert_nodelist(n.nodelist, cstart, cend),
                begin_space=begin_space,
                end_space=end_space,
                position=(n.pos, nend)
            ), nend

        # specials and anything else are read as characters
        return None, None

    def make_verbatim_node(self, region):
        position = (region.start, region.end)
        if region.kind == 'verb':
            return latexnodes.VerbNode(region.name, region.content,
                                       delimiter=region.delimiter,
                                       star=region.star, position=position)
        return latexnodes.VerbatimNode(region.name, region.content,
                                       begin_space=region.begin_space,
                                       end_space=region.end_space,
                                       position=position)


def _make_tokenizer_context():
    # no known macros: every macro, environment and specials is read without
    # arguments, argument attachment is our job
    ctx = LatexContextDb()
    ctx.set_unknown_macro_spec(MacroSpec(''))
    ctx.set_unknown_environment_spec(EnvironmentSpec(''))
    ctx.set_unknown_specials_spec(SpecialsSpec(''))
    return ctx


class LatexParser:
    r"""
    Parse LaTeX code into a syntax tree.

    Arguments:

    - `packages`: names of the package tables to load (see
      :py:mod:`latexast.packages`), by default
      :py:data:`latexast.packages.default_packages`.

    - `macros`, `environments`: additional signature tables, registered after
      the packages' tables (later registration wins).

    - `verbatim_environments`, `verb_macros`: names of environments and
      macros whose contents is read verbatim.

    - `at_letter`, `expl3`: If `True`, ``@`` (resp. ``_`` and ``:``) are
      read as part of macro names throughout the document.  In any case they
      are between ``\makeatletter`` and ``\makeatother`` (resp.
      ``\ExplSyntaxOn`` and ``\ExplSyntaxOff``), see
      :py:mod:`latexast.catcode`.

    - `tolerant_parsing`: If `True` (the default), syntax errors are
      recovered from as well as possible and missing mandatory arguments are
      represented by error nodes.  If `False`, a
      :py:exc:`pylatexenc.latexwalker.LatexWalkerParseError` or a
      :py:exc:`~latexast.errors.MalformedArgument` is raised instead.
    """
    def __init__(self, packages=None, macros=None, environments=None, *,
                 verbatim_environments=default_verbatim_environments,
                 verb_macros=default_verb_macros,
                 at_letter=False, expl3=False,
                 tolerant_parsing=True):
        super().__init__()

        self.macros = {}
        self.environments = {}

        self.verbatim_environments = tuple(verbatim_environments)
        self.verb_macros = tuple(verb_macros)
        self.at_letter = at_letter
        self.expl3 = expl3
        self.tolerant_parsing = tolerant_parsing

        self.latex_context = _make_tokenizer_context()

        if packages is None:
            packages = latexpackages.default_packages
        for pkg in packages:
            pkgmacros, pkgenvironments = latexpackages.get_package(pkg)
            self.add_definitions(macros=pkgmacros, environments=pkgenvironments)

        self.add_definitions(macros=macros, environments=environments)

    def add_definitions(self, macros=None, environments=None):
        r"""
        Register additional macro and environment tables.  All signatures are
        checked first; if any is invalid,
        :py:exc:`~latexast.errors.InvalidSignature` is raised and nothing is
        registered.
        """
        for table in (macros, environments):
            if not table:
                continue
            for name, entry in table.items():
                if isinstance(entry, str):
                    parse_signature(entry)
                else:
                    parse_signature(entry.get('signature', ''))

        if macros:
            self.macros.update(macros)
        if environments:
            self.environments.update(environments)

    def make_latex_walker(self, s):
        r"""
        Create the :py:class:`pylatexenc.latexwalker.LatexWalker` instance that
        tokenizes `s`.
        """
        return latexwalker.LatexWalker(s, latex_context=self.latex_context,
                                       tolerant_parsing=self.tolerant_parsing)

    def parse_nodes(self, s):
        r"""
        Parse `s` and return the list of top-level nodes.
        """
        regions = find_verbatim_regions(s, self.verbatim_environments,
                                        self.verb_macros)

        lw = self.make_latex_walker(_mask_verbatim_regions(s, regions))
        (nodelist, pos, len_) = lw.get_latex_nodes(pos=0)

        nodelist = _NodeConverter(s, regions).convert_nodelist(nodelist, 0, len(s))

        reparse_at_letter_and_expl3_regions(nodelist, at_letter=self.at_letter,
                                            expl3=self.expl3)

        attach_arguments(nodelist, self.macros, self.environments,
                         strict=not self.tolerant_parsing)

        logger.debug("Parsed %d characters into %d top-level nodes", len(s), len(nodelist))

        return nodelist

    def parse(self, s):
        r"""
        Parse `s` and return a :py:class:`~latexast.nodes.RootNode`.
        """
        return latexnodes.RootNode(self.parse_nodes(s), position=(0, len(s)))


_default_parser = None


def get_default_parser():
    r"""
    Return a shared :py:class:`LatexParser` instance with the default
    package tables.  It must not be modified.
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = LatexParser()
    return _default_parser


def parse_latex(s, **kwargs):
    r"""
    Parse the LaTeX string `s` and return the root node of its syntax tree.
    Keyword arguments are passed on to :py:class:`LatexParser`.
    """
    return LatexParser(**kwargs).parse(s)
