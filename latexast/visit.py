r"""
Depth-first traversal of the syntax tree.

The callback passed to :py:func:`visit` is called as ``callback(node,
info)`` where `info` is a :py:class:`VisitInfo` describing where the node
sits in the tree and the lexical context at that point (math mode, enclosing
scopes).  The context is computed on the fly from the ancestors of each node
and is never stored on the nodes.

Children of a node are visited in a fixed order: a macro's or environment's
arguments first, in signature order, then the environment body, in document
order.

The callback may return :py:data:`SKIP` to avoid descending into the node's
children, or :py:data:`EXIT` to stop the traversal altogether.  Any other
return value (usually `None`) continues the traversal.  The callback must not
modify the tree; use :py:func:`latexast.replace.replace_node` to rewrite it.
"""

import collections
import logging

logger = logging.getLogger(__name__)

from .nodes import child_lists


CONTINUE = 'continue'
SKIP = 'skip'
EXIT = 'exit'


class VisitorContext(collections.namedtuple(
        'VisitorContext', ('in_math_mode', 'has_math_mode_ancestor', 'scopes'))):
    r"""
    Lexical context of a node.

    .. py:attribute:: in_math_mode

       Whether the node is read in math mode.  This is `False` inside
       ``\text{...}`` even within an equation.

    .. py:attribute:: has_math_mode_ancestor

       Whether any enclosing node puts its contents in math mode.

    .. py:attribute:: scopes

       Tuple of the enclosing group, environment and math nodes, outermost
       first.
    """
    __slots__ = ()


_root_context = VisitorContext(in_math_mode=False, has_math_mode_ancestor=False,
                               scopes=())


class VisitInfo(collections.namedtuple(
        'VisitInfo', ('key', 'index', 'parents', 'containing_list', 'context'))):
    r"""
    Information about a visited node.

    .. py:attribute:: key

       Name of the parent's field that holds the node (``'content'`` or
       ``'args'``), or `None` at the top level.

    .. py:attribute:: index

       Index of the node in `containing_list`.

    .. py:attribute:: parents

       Tuple of the ancestors of the node, nearest first.

    .. py:attribute:: containing_list

       The list the node lives in, or `None` for the root.

    .. py:attribute:: context

       The :py:class:`VisitorContext` of the node.
    """
    __slots__ = ()

    @property
    def parent(self):
        return self.parents[0] if self.parents else None


def descend_context(node, key, context):
    r"""
    Return the context of the children stored in field `key` of `node`,
    given the `context` of `node` itself.
    """
    math_mode = context.in_math_mode
    nodetype = node.nodetype
    if nodetype == 'math':
        math_mode = True
    elif (nodetype == 'macro' and key == 'args') \
         or (nodetype == 'environment' and key == 'content'):
        flag = node.render_info.get('inMathMode')
        if flag is not None:
            math_mode = bool(flag)

    scopes = context.scopes
    if nodetype in ('group', 'environment', 'math'):
        scopes = scopes + (node,)

    return VisitorContext(
        in_math_mode=math_mode,
        has_math_mode_ancestor=context.has_math_mode_ancestor or math_mode,
        scopes=scopes,
    )


def visit(tree, callback, post_order=False, test=None, starting_context=None):
    r"""
    Visit all nodes of `tree`, a node or a list of nodes.

    Arguments:

    - `callback`: called as ``callback(node, info)`` for each node.

    - `post_order`: If `True`, call the callback on a node after its children
      rather than before.  Returning :py:data:`SKIP` then has no effect.

    - `test`: if not `None`, a predicate ``test(node)`` (e.g. a matcher from
      :py:mod:`latexast.match`); the callback is only called on nodes for
      which it is true.  All nodes are still traversed.

    - `starting_context`: the :py:class:`VisitorContext` of the top-level
      nodes, e.g. to visit a fragment known to be in math mode.

    Returns :py:data:`EXIT` if the traversal was stopped by the callback,
    :py:data:`CONTINUE` otherwise.
    """
    if starting_context is None:
        starting_context = _root_context

    def walk(node, key, index, parents, containing_list, context):
        info = VisitInfo(key, index, parents, containing_list, context)
        selected = test is None or test(node)

        if selected and not post_order:
            action = callback(node, info)
            if action == EXIT:
                return EXIT
            if action == SKIP:
                return CONTINUE

        child_parents = (node,) + parents
        for ckey, lst in child_lists(node):
            ccontext = descend_context(node, ckey, context)
            # index-based, so that the list may change under our feet
            j = 0
            while j < len(lst):
                if walk(lst[j], ckey, j, child_parents, lst, ccontext) == EXIT:
                    return EXIT
                j += 1

        if selected and post_order:
            if callback(node, info) == EXIT:
                return EXIT

        return CONTINUE

    if isinstance(tree, list):
        j = 0
        while j < len(tree):
            if walk(tree[j], None, j, (), tree, starting_context) == EXIT:
                return EXIT
            j += 1
        return CONTINUE

    return walk(tree, None, None, (), None, starting_context)


def iter_nodes(tree, test=None):
    r"""
    Return a list of ``(node, info)`` pairs for all nodes of `tree` in
    pre-order, keeping only those for which ``test(node)`` is true if `test`
    is given.
    """
    found = []
    visit(tree, lambda node, info: found.append((node, info)), test=test)
    return found
