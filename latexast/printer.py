r"""
Turn a syntax tree back into text.

- :py:func:`print_raw` reconstructs LaTeX source.  For a tree obtained from
  the parser, ``print_raw(parse_latex(s)) == s``.

- :py:func:`to_string` extracts plain text, dropping markup.  It is lossy by
  nature.
"""

import re
import string
import functools
import logging

logger = logging.getLogger(__name__)

from pylatexenc.latex2text import LatexNodes2Text, get_default_latex_context_db


class _ControlWord(str):
    # a macro name like '\foo' in the token stream; a letter right after it
    # would be read as part of the name
    pass


_LINEBREAK = object()


def _render_flag(node, *names):
    return any(node.render_info.get(n) for n in names)


class _RawPrinter:
    def __init__(self, line_breaks):
        super().__init__()
        self.line_breaks = line_breaks
        self.tokens = []

    def add(self, x):
        if isinstance(x, list):
            for n in x:
                self.add_node(n)
        else:
            self.add_node(x)

    def add_node(self, n):
        t = n.nodetype
        out = self.tokens

        if t in ('root', 'group', 'math'):
            if t == 'group':
                out.append('{')
            elif t == 'math':
                out.append(n.delimiters[0])
            self.add(n.content)
            if t == 'group':
                out.append('}')
            elif t == 'math':
                out.append(n.delimiters[1])
            return

        if t in ('text', 'whitespace', 'parbreak', 'error'):
            out.append(n.content)
            return

        if t == 'comment':
            out.append('%' + n.content + n.post_space)
            return

        if t == 'placeholder':
            out.append('#' + str(n.number))
            return

        if t == 'argument':
            if n.is_blank():
                return
            out.append(n.pre_space + n.open_mark)
            self.add(n.content)
            out.append(n.close_mark)
            return

        if t == 'verb':
            out.append(_ControlWord('\\' + n.name))
            out.append(('*' if n.star else '') + n.delimiter + n.content + n.delimiter)
            return

        if t == 'verbatim':
            out.append('\\begin' + n.begin_space + '{' + n.name + '}' + n.content
                       + '\\end' + n.end_space + '{' + n.name + '}')
            return

        if t in ('macro', 'environment'):
            if _render_flag(n, 'breakAround', 'breakBefore'):
                out.append(_LINEBREAK)
            if t == 'macro':
                out.append(_ControlWord('\\' + n.name))
            else:
                out.append('\\begin' + n.begin_space + '{' + n.name + '}')
            if n.args:
                for a in n.args:
                    self.add_node(a)
            if t == 'environment':
                self.add(n.content)
                out.append('\\end' + n.end_space + '{' + n.name + '}')
            if _render_flag(n, 'breakAround', 'breakAfter'):
                out.append(_LINEBREAK)
            return

        raise ValueError("Unknown node type: {!r}".format(n))

    def get_string(self):
        chunks = []
        prev = ''
        toks = [x for x in self.tokens if x is _LINEBREAK or x]
        for j, tok in enumerate(toks):
            if tok is _LINEBREAK:
                if not self.line_breaks:
                    continue
                nxt = next((x for x in toks[j+1:] if x is not _LINEBREAK), None)
                if not chunks or prev.rstrip(' \t').endswith('\n'):
                    continue
                if nxt is None or nxt.lstrip(' \t').startswith('\n'):
                    continue
                tok = '\n'
            elif isinstance(prev, _ControlWord) and prev[-1] in string.ascii_letters \
                 and tok[0] in string.ascii_letters:
                chunks.append(' ')
            chunks.append(tok)
            prev = tok
        return ''.join(chunks)


def print_raw(node, line_breaks=False):
    r"""
    Return the LaTeX source of `node`, a node or a list of nodes.

    If `line_breaks` is `True`, the ``breakAround``, ``breakBefore`` and
    ``breakAfter`` render hints of macros and environments produce a line
    break before and/or after them, unless there is one already.
    """
    p = _RawPrinter(line_breaks=line_breaks)
    p.add(node)
    return p.get_string()


#: Macros whose last argument is kept by :py:func:`to_string`.
default_transparent_macros = frozenset([
    'textbf', 'textit', 'textrm', 'textsf', 'texttt', 'textsc', 'textsl',
    'textup', 'textmd', 'textnormal', 'emph', 'underline', 'uppercase',
    'mbox', 'text', 'textcolor', 'href', 'url', 'footnote',
    'part', 'chapter', 'section', 'subsection', 'subsubsection', 'paragraph',
    'subparagraph', 'title', 'author', 'date', 'caption',
])

_layout_macros = {
    '\\': '\n', 'newline': '\n', 'par': '\n\n',
}


@functools.lru_cache(maxsize=None)
def _get_latex2text():
    return LatexNodes2Text(latex_context=get_default_latex_context_db(),
                           math_mode='verbatim')


def _macro_text(node):
    # replacement text of a known symbol or accent macro, '' for unknown ones
    l2t = _get_latex2text()
    spec = l2t.latex_context.get_macro_spec(node.name)
    if spec is None:
        return ''
    repl = spec.simplify_repl
    if isinstance(repl, str) and '%' not in repl:
        return repl
    return l2t.latex_to_text(print_raw(node))


def to_string(node, transparent_macros=None):
    r"""
    Return a plain-text rendering of `node` (a node or a list of nodes).

    Macros listed in `transparent_macros` (by default
    :py:data:`default_transparent_macros`) are replaced by the text of their
    last argument.  Macros known to :py:mod:`pylatexenc.latex2text`, such as
    ``\%``, ``\ss`` or ``\'{e}``, become the text they stand for.  Other
    macros, comments and environment arguments are dropped.  Math keeps its
    contents as LaTeX source, without the math delimiters.  Whitespace is
    collapsed.
    """
    if transparent_macros is None:
        transparent_macros = default_transparent_macros

    parts = []

    def add(x):
        if isinstance(x, list):
            for n in x:
                add(n)
            return
        t = x.nodetype
        if t in ('root', 'group', 'environment', 'argument'):
            add(x.content)
        elif t == 'text':
            parts.append(x.content.replace('~', ' '))
        elif t == 'whitespace':
            parts.append(' ')
        elif t == 'parbreak':
            parts.append('\n\n')
        elif t in ('verbatim', 'verb'):
            parts.append(x.content)
        elif t == 'math':
            parts.append(print_raw(x.content).strip())
        elif t == 'placeholder':
            parts.append('#' + str(x.number))
        elif t == 'macro':
            if x.name in transparent_macros:
                if x.args:
                    given = [a for a in x.args if not a.is_blank()]
                    if given:
                        add(given[-1].content)
            elif x.name in _layout_macros:
                parts.append(_layout_macros[x.name])
            else:
                parts.append(_macro_text(x))
        # comments and errors are dropped

    add(node)

    s = ''.join(parts)
    s = re.sub(r'[ \t]+', ' ', s)
    s = re.sub(r' *\n *', '\n', s)
    s = re.sub(r'\n{3,}', '\n\n', s)
    return s.strip()
