r"""
Predicates on syntax tree nodes.

All functions in this module inspect only the node they are given, never its
position in the tree, and simply return `False` for anything that does not
match (including `None`).

Matchers for many names at once are built with
:py:func:`create_macro_matcher` and :py:func:`create_environment_matcher`;
they look names up in a dictionary, so their cost does not depend on the
size of the table.
"""


def _is(node, nodetype):
    return node is not None and getattr(node, 'nodetype', None) == nodetype


def macro(node, name=None):
    r"""
    Test whether `node` is a macro node, with the given name if `name` is not
    `None`.
    """
    if not _is(node, 'macro'):
        return False
    return name is None or node.name == name


def any_macro(node):
    return _is(node, 'macro')


def environment(node, name=None):
    r"""
    Test whether `node` is an environment (a regular one or a verbatim one),
    with the given name if `name` is not `None`.
    """
    if not (_is(node, 'environment') or _is(node, 'verbatim')):
        return False
    return name is None or node.name == name


def any_environment(node):
    return _is(node, 'environment') or _is(node, 'verbatim')


def string(node, value=None):
    r"""
    Test whether `node` is a text node, with content exactly `value` if
    `value` is not `None`.
    """
    if not _is(node, 'text'):
        return False
    return value is None or node.content == value


def any_string(node):
    return _is(node, 'text')


def whitespace(node):
    return _is(node, 'whitespace')


def parbreak(node):
    return _is(node, 'parbreak')


def whitespace_like(node):
    r"""
    Whitespace, paragraph breaks and comments.
    """
    return _is(node, 'whitespace') or _is(node, 'parbreak') or _is(node, 'comment')


def comment(node):
    return _is(node, 'comment')


def group(node):
    return _is(node, 'group')


def math(node, display=None):
    r"""
    Test whether `node` is a math node; if `display` is `True` (`False`),
    only display (inline) math matches.
    """
    if not _is(node, 'math'):
        return False
    return display is None or bool(node.display) == bool(display)


def argument(node):
    return _is(node, 'argument')


def blank_argument(node):
    r"""
    Test whether `node` is an optional argument that was not given.
    """
    return _is(node, 'argument') and node.is_blank()


def verbatim(node):
    return _is(node, 'verbatim') or _is(node, 'verb')


def error(node):
    return _is(node, 'error')


def _make_name_matcher(names, test_type):
    if isinstance(names, str):
        names = [names]
    lookup = dict.fromkeys(names)

    def matcher(node, name=None):
        if not test_type(node):
            return False
        if node.name not in lookup:
            return False
        return name is None or node.name == name

    matcher.names = frozenset(lookup)
    return matcher


def create_macro_matcher(names):
    r"""
    Return a predicate that is true for macro nodes whose name is in `names`.

    The `names` may be a single name, an iterable of names, or a dictionary
    keyed by names (e.g. a package's macro table).  The returned function
    accepts an optional second argument `name` to further restrict the match.
    """
    return _make_name_matcher(names, any_macro)


def create_environment_matcher(names):
    r"""
    Same as :py:func:`create_macro_matcher`, for environments.
    """
    return _make_name_matcher(names, any_environment)


def any_of(*matchers):
    r"""
    Return a predicate that is true if any of the given predicates is.
    """
    def matcher(node):
        return any(m(node) for m in matchers)
    return matcher


def all_of(*matchers):
    def matcher(node):
        return all(m(node) for m in matchers)
    return matcher


def negate(m):
    def matcher(node):
        return not m(node)
    return matcher
