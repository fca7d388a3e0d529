r"""
Small helpers operating on node lists.
"""

import re
import collections
import logging

logger = logging.getLogger(__name__)

from . import match
from . import nodes as latexnodes
from .replace import replace_node


def _is_space(n):
    return match.whitespace(n) or match.parbreak(n)


def trim_start(nodes):
    r"""
    Return a copy of the node list `nodes` without its leading whitespace and
    paragraph breaks.
    """
    j = 0
    while j < len(nodes) and _is_space(nodes[j]):
        j += 1
    return list(nodes[j:])


def trim_end(nodes):
    r"""
    Return a copy of the node list `nodes` without its trailing whitespace and
    paragraph breaks.
    """
    j = len(nodes)
    while j > 0 and _is_space(nodes[j-1]):
        j -= 1
    return list(nodes[:j])


def trim(nodes):
    return trim_end(trim_start(nodes))


def has_parbreak(nodes):
    r"""
    Whether the node list `nodes` contains a paragraph break at its top
    level, either as a parbreak node or as a ``\par`` macro.
    """
    return any(match.parbreak(n) or match.macro(n, 'par') for n in nodes)


def split_on_macro(nodes, names):
    r"""
    Split the node list `nodes` at every top-level macro whose name is in
    `names` (a name or a list of names).

    Returns ``(segments, macros)`` where `macros` lists the separating macro
    nodes in order and `segments` has one more element than `macros`: the
    node lists before, between and after them.  For instance, splitting the
    contents of an ``itemize`` environment on ``item`` gives the preamble
    and then the contents of each item.
    """
    is_sep = match.create_macro_matcher(names)
    segments = [[]]
    macros = []
    for n in nodes:
        if is_sep(n):
            macros.append(n)
            segments.append([])
        else:
            segments[-1].append(n)
    return segments, macros


def delete_comments(tree):
    r"""
    Remove all comment nodes from `tree`.  The whitespace a comment
    swallowed at the end of its line is removed with it.  Returns the new
    tree; the node lists of `tree` are not modified.
    """
    def callback(node, info):
        if match.comment(node):
            return []
        return None

    return replace_node(latexnodes.clone(tree), callback)


AlignRow = collections.namedtuple(
    'AlignRow',
    ('cells', 'col_seps', 'row_sep', 'trailing_comment')
)
AlignRow.__doc__ = r"""
One row of an alignment environment, as returned by
:py:func:`parse_align_environment`: the list of `cells` (each a node list),
the column separator nodes `col_seps` found between them, the macro
`row_sep` that ends the row (or `None` for a last row without one) and the
comment found after it on the same line, `trailing_comment` (or `None`).
"""


def _split_col_seps(nodes, col_seps):
    # text runs may hold separators, as in 'a&b'; give each one its own node
    rx = re.compile('(' + '|'.join(re.escape(sep) for sep in col_seps) + ')')
    result = []
    for n in nodes:
        if not match.any_string(n) or rx.search(n.content) is None:
            result.append(n)
            continue
        p = n.position[0] if n.position is not None else None
        for piece in rx.split(n.content):
            if not piece:
                continue
            position = (p, p + len(piece)) if p is not None else None
            result.append(latexnodes.TextNode(piece, position=position))
            if p is not None:
                p += len(piece)
    return result


def _same_line_comment(nodes, j):
    # index of a comment following nodes[j-1] on the same line, or None
    while j < len(nodes) and match.whitespace(nodes[j]) and '\n' not in nodes[j].content:
        j += 1
    if j < len(nodes) and match.comment(nodes[j]):
        return j
    return None


def parse_align_environment(nodes, col_seps=('&',), row_sep_macros=('\\', 'hline', 'cr')):
    r"""
    Split the body `nodes` of an alignment environment (``tabular``,
    ``align``, ``matrix``, ..., the environments with the ``alignContent``
    render hint) into rows and cells.

    Rows end at the macros named in `row_sep_macros`, cells at the text
    given in `col_seps`.  Returns a list of :py:class:`AlignRow`.  The
    whitespace around the contents of each cell is trimmed.  A final row
    without row separator is only returned if it is not empty.  The list
    `nodes` is not modified.

    For instance, the body ``a & b \\ c`` gives two rows, with cells
    ``[a]``, ``[b]`` and ``[c]``.
    """
    is_row_sep = match.create_macro_matcher(list(row_sep_macros))
    nodes = _split_col_seps(nodes, col_seps)

    rows = []
    cells, seps, current = [], [], []
    j = 0
    while j < len(nodes):
        n = nodes[j]
        if is_row_sep(n):
            cells.append(trim(current))
            comment = None
            k = _same_line_comment(nodes, j+1)
            if k is not None:
                comment = nodes[k]
                j = k
            rows.append(AlignRow(cells, seps, n, comment))
            cells, seps, current = [], [], []
        elif match.any_string(n) and n.content in col_seps:
            cells.append(trim(current))
            seps.append(n)
            current = []
        else:
            current.append(n)
        j += 1

    current = trim(current)
    if current or seps:
        cells.append(current)
        rows.append(AlignRow(cells, seps, None, None))

    logger.debug("Found %d rows in alignment", len(rows))
    return rows
