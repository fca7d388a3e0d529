r"""
Rewrite a syntax tree during a traversal.

:py:func:`replace_node` walks the tree like :py:func:`latexast.visit.visit`
and lets the callback decide what happens to each node:

- returning `None`, or the node itself, keeps the node and continues into its
  children;

- returning :py:data:`latexast.visit.SKIP` keeps the node without looking at
  its children;

- returning an empty list deletes the node;

- returning a single node puts it in the place of the original node, and the
  traversal then continues into the children of the replacement (the
  replacement itself is not passed to the callback again);

- returning a list of nodes splices them, in order, in place of the original
  node.  The spliced nodes are not visited.

Lists that hold modified children are never changed in place.  A new list is
built and assigned to the parent node, so that anyone iterating over the old
list is not disturbed.

Exceptions raised by the callback propagate, and the tree may then be left
partially rewritten.  Work on a :py:func:`~latexast.nodes.clone` of the tree
if the original must survive a failed pass.
"""

import logging

logger = logging.getLogger(__name__)

from .nodes import LatexNode, child_lists
from .visit import VisitInfo, SKIP, descend_context, _root_context


def replace_node(tree, callback, starting_context=None):
    r"""
    Rewrite `tree` (a node or a list of nodes) by calling ``callback(node,
    info)`` on each node, see the module documentation.  The `info` argument
    is a :py:class:`~latexast.visit.VisitInfo`; its `containing_list` is the
    list as it was before any of its members were replaced.

    Returns the new tree: the same object as `tree` unless the root itself
    was replaced (in which case the replacement is returned, possibly a list
    of nodes) or `tree` is a list (a new list is then returned).
    """
    if starting_context is None:
        starting_context = _root_context

    def process(node, key, index, parents, containing_list, context):
        info = VisitInfo(key, index, parents, containing_list, context)
        result = callback(node, info)

        if isinstance(result, str) and result == SKIP:
            return node
        if result is None or result is node:
            descend(node, parents, context)
            return node
        if isinstance(result, list):
            return result
        if not isinstance(result, LatexNode):
            raise TypeError("replace_node() callback returned invalid value {!r}"
                            .format(result))
        descend(result, parents, context)
        return result

    def process_list(lst, key, parents, context):
        newlst = []
        changed = False
        for j, child in enumerate(lst):
            r = process(child, key, j, parents, lst, context)
            if isinstance(r, list):
                newlst.extend(r)
                changed = True
            else:
                newlst.append(r)
                if r is not child:
                    changed = True
        return newlst, changed

    def descend(node, parents, context):
        child_parents = (node,) + parents
        for key, lst in list(child_lists(node)):
            ccontext = descend_context(node, key, context)
            newlst, changed = process_list(lst, key, child_parents, ccontext)
            if changed:
                setattr(node, key, newlst)

    if isinstance(tree, list):
        return process_list(tree, None, (), starting_context)[0]

    return process(tree, None, None, (), None, starting_context)
