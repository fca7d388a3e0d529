r"""
Attach arguments to macro and environment nodes according to their
signatures.

The tokenizer does not know how many arguments a macro takes: it produces a
flat list in which ``\section*{Intro}`` is a macro node followed by a text
node ``*`` and a group node.  The functions in this module walk such lists
and move the tokens that form the arguments of known macros into
:py:class:`~latexast.nodes.ArgumentNode` instances on the macro node.

Node lists are processed left to right, as TeX reads its input: in
``\textbf\emph{x}``, the argument of ``\textbf`` is the bare token
``\emph``.  Arguments are looked up with a one-token lookahead.  An optional
argument is absent as soon as the next token is not its opening delimiter,
and a consumed optional argument is never given back, even if a later
mandatory argument then goes missing.
"""

import logging

logger = logging.getLogger(__name__)

from . import nodes as latexnodes
from .errors import MalformedArgument
from .signature import parse_signature


#: Argument that holds the name of the macro being defined, by defining
#: macro.  Macros in these arguments are names, not invocations, and are not
#: given arguments.
definition_name_arguments = {
    'newcommand': 1,
    'renewcommand': 1,
    'providecommand': 1,
    'DeclareRobustCommand': 1,
    'NewDocumentCommand': 0,
    'RenewDocumentCommand': 0,
    'ProvideDocumentCommand': 0,
    'DeclareDocumentCommand': 0,
    'NewExpandableDocumentCommand': 0,
    'RenewExpandableDocumentCommand': 0,
}


def _span(nodelist):
    if not nodelist:
        return None
    p0 = nodelist[0].position
    p1 = nodelist[-1].position
    if p0 is None or p1 is None:
        return None
    return (p0[0], p1[1])


def _split_text_node(nodelist, i, k):
    r"""
    Split the text node ``nodelist[i]`` so that its first `k` characters form
    a node of their own.  The tail, if any, is inserted at ``i+1``.
    """
    n = nodelist[i]
    if k <= 0 or k >= len(n.content):
        return
    head_pos, tail_pos = None, None
    if n.position is not None:
        head_pos = (n.position[0], n.position[0] + k)
        tail_pos = (n.position[0] + k, n.position[1])
    tail = latexnodes.TextNode(n.content[k:], position=tail_pos)
    n.content = n.content[:k]
    n.position = head_pos
    nodelist.insert(i+1, tail)


def _is_skippable(n):
    return n.nodetype in ('whitespace', 'comment')


def _skip_space(nodelist, i, spec):
    r"""
    Return the index of the first token at or after `i` that may start the
    argument described by `spec`.
    """
    if spec.no_leading_whitespace:
        return i
    while i < len(nodelist) and _is_skippable(nodelist[i]):
        i += 1
    return i


def _raw_skipped(nodelist, i, j):
    parts = []
    for n in nodelist[i:j]:
        if n.nodetype == 'comment':
            parts.append('%' + n.content + n.post_space)
        else:
            parts.append(n.content)
    return ''.join(parts)


def _starts_with(n, ch):
    return n.nodetype == 'text' and n.content.startswith(ch)


def _find_closing(nodelist, i, open_mark, close_mark):
    r"""
    Look for `close_mark` in the text nodes of `nodelist` from index `i` on,
    taking nested `open_mark`/`close_mark` pairs into account.  Groups are
    opaque.  If found, the text node is split so that the closing delimiter
    is a node of its own and its index is returned; otherwise returns `None`.
    """
    depth = 0
    j = i
    while j < len(nodelist):
        n = nodelist[j]
        if n.nodetype == 'parbreak':
            return None
        if n.nodetype == 'text':
            for k, c in enumerate(n.content):
                if c == close_mark and depth == 0:
                    _split_text_node(nodelist, j, k)
                    if k > 0:
                        j += 1
                    _split_text_node(nodelist, j, len(close_mark))
                    return j
                if c == close_mark:
                    depth -= 1
                elif c == open_mark and open_mark != close_mark:
                    depth += 1
        j += 1
    return None


def gobble_single_argument(nodelist, i, spec):
    r"""
    Try to read one argument described by `spec` (an
    :py:class:`~latexast.signature.ArgSpec`) starting at index `i` of
    `nodelist`.

    Returns a tuple ``(argument_node, new_i)``.  If the argument is not
    present, returns ``(None, i)`` and leaves the list unchanged (apart from
    possibly splitting text nodes, which does not change how the list
    prints).  The consumed tokens are not removed from the list; the caller
    deletes ``nodelist[i:new_i]``.
    """
    j = _skip_space(nodelist, i, spec)
    if j >= len(nodelist):
        return None, i
    n = nodelist[j]
    pre_space = _raw_skipped(nodelist, i, j)

    if spec.kind in ('star', 'token'):
        if not _starts_with(n, spec.open_mark):
            return None, i
        _split_text_node(nodelist, j, len(spec.open_mark))
        tok = nodelist[j]
        arg = latexnodes.ArgumentNode([tok], position=tok.position)
        arg.pre_space = pre_space
        return arg, j + 1

    if spec.letter == 'm':
        if n.nodetype == 'group':
            arg = latexnodes.ArgumentNode(n.content, '{', '}', position=n.position)
        elif n.nodetype == 'text':
            _split_text_node(nodelist, j, 1)
            arg = latexnodes.ArgumentNode([nodelist[j]], position=nodelist[j].position)
        elif n.nodetype in ('parbreak', 'error', 'whitespace', 'comment'):
            return None, i
        else:
            arg = latexnodes.ArgumentNode([n], position=n.position)
        arg.pre_space = pre_space
        return arg, j + 1

    # delimited argument, e.g. [...] or <...>
    if not _starts_with(n, spec.open_mark):
        return None, i
    _split_text_node(nodelist, j, len(spec.open_mark))
    k = _find_closing(nodelist, j+1, spec.open_mark, spec.close_mark)
    if k is None:
        return None, i
    content = nodelist[j+1:k]
    position = None
    if nodelist[j].position is not None and nodelist[k].position is not None:
        position = (nodelist[j].position[0], nodelist[k].position[1])
    arg = latexnodes.ArgumentNode(content, spec.open_mark, spec.close_mark,
                                  position=position)
    arg.pre_space = pre_space
    return arg, k + 1


def gobble_arguments(nodelist, i, argspecs, name, strict=False):
    r"""
    Read the arguments described by the list `argspecs` from `nodelist`
    starting at index `i`, remove the consumed tokens from the list, and
    return the list of argument nodes (one per spec).

    Absent optional arguments are returned as blank argument nodes.  A
    missing mandatory argument raises
    :py:exc:`~latexast.errors.MalformedArgument` if `strict` is set, and is
    otherwise returned as an argument containing an error node.
    """
    args = []
    p = i
    for spec in argspecs:
        arg, newp = gobble_single_argument(nodelist, p, spec)
        if arg is None:
            if not spec.is_optional:
                where = None
                if p < len(nodelist) and nodelist[p].position is not None:
                    where = nodelist[p].position[0]
                if strict:
                    raise MalformedArgument(name, spec.to_signature(), where)
                logger.warning("Missing mandatory argument ‘%s’ for ‘\\%s’%s",
                               spec.to_signature(), name,
                               ' at position {}'.format(where) if where is not None else '')
                arg = latexnodes.ArgumentNode([
                    latexnodes.ErrorNode(
                        "Missing mandatory argument ‘{}’ for ‘\\{}’"
                        .format(spec.to_signature(), name),
                        kind='MalformedArgument',
                    )
                ])
            else:
                arg = latexnodes.ArgumentNode()
        args.append(arg)
        p = newp
    del nodelist[i:p]
    return args


def _table_entry(table, name):
    entry = table.get(name)
    if entry is None:
        return None, None
    if isinstance(entry, str):
        return entry, None
    return entry.get('signature', ''), entry.get('renderInfo')


def attach_arguments(tree, macros=None, environments=None, strict=False):
    r"""
    Attach arguments to every macro and environment node of `tree` (a node or
    a node list) whose name appears in the tables `macros` and
    `environments` and whose arguments have not been attached yet.

    Tables have the shape ``{name: {'signature': ..., 'renderInfo': ...}}``;
    a plain string value is taken as the signature.  The render info of the
    table entry is merged into the node's `render_info`.

    The tree is modified in place.  Running this function again with the
    same tables does nothing.
    """
    if macros is None:
        macros = {}
    if environments is None:
        environments = {}

    def process_list(nodelist):
        i = 0
        while i < len(nodelist):
            n = nodelist[i]
            if n.nodetype == 'macro' and n.args is None:
                signature, render_info = _table_entry(macros, n.name)
                if signature is not None:
                    argspecs = parse_signature(signature)
                    if argspecs:
                        n.args = gobble_arguments(nodelist, i+1, argspecs, n.name,
                                                  strict=strict)
                        span = _span([n] + [a for a in n.args if a.position])
                        if span is not None:
                            n.position = span
                    latexnodes.update_render_info(n, render_info)
            elif n.nodetype == 'environment' and n.args is None:
                signature, render_info = _table_entry(environments, n.name)
                if signature is not None:
                    argspecs = parse_signature(signature)
                    if argspecs:
                        n.args = gobble_arguments(n.content, 0, argspecs, n.name,
                                                  strict=strict)
                    latexnodes.update_render_info(n, render_info)
            i += 1

        for n in nodelist:
            name_index = None
            if n.nodetype == 'macro':
                name_index = definition_name_arguments.get(n.name)
            for key, lst in latexnodes.child_lists(n):
                if key == 'args' and name_index is not None:
                    process_list([a for j, a in enumerate(lst) if j != name_index])
                else:
                    process_list(lst)

    if isinstance(tree, list):
        process_list(tree)
    else:
        process_list([tree])
    return tree


def attach_macro_args(tree, macros, strict=False):
    r"""
    Same as :py:func:`attach_arguments` with only a macro table.
    """
    return attach_arguments(tree, macros=macros, strict=strict)


def attach_environment_args(tree, environments, strict=False):
    r"""
    Same as :py:func:`attach_arguments` with only an environment table.
    """
    return attach_arguments(tree, environments=environments, strict=strict)
