r"""
The node classes of the LaTeX syntax tree.

The node set is closed: each class sets a `nodetype` discriminant string and
lists its structural fields in `_fields`.  Code that walks or prints the tree
dispatches on `node.nodetype`, never on the Python class.

Every node has two extra attributes that are not part of its structure:

- `position` is either `None` or a pair ``(start, end)`` of offsets into the
  source string the node was parsed from;

- `render_info` is a dictionary of formatting hints (``breakAround``,
  ``inMathMode``, ...), copied from the macro or environment tables when the
  node is parsed.  It is consulted by the printer and by downstream
  converters only.

Two nodes compare equal when they have the same `nodetype` and equal fields;
`position` and `render_info` are ignored.
"""

import copy


class LatexNode:
    r"""
    Base class for all syntax tree nodes.  Don't instantiate directly.
    """

    nodetype = None

    _fields = ()

    def __init__(self, *, position=None, render_info=None):
        super().__init__()
        self.position = position
        self.render_info = dict(render_info) if render_info else {}

    def is_nodetype(self, nodetype):
        return self.nodetype == nodetype

    def __eq__(self, other):
        if not isinstance(other, LatexNode):
            return NotImplemented
        return self.nodetype == other.nodetype and all(
            getattr(self, f) == getattr(other, f) for f in self._fields
        )

    __hash__ = None

    def __repr__(self):
        return "{}({})".format(
            self.__class__.__name__,
            ", ".join("{}={!r}".format(f, getattr(self, f)) for f in self._fields)
        )

    def to_json_object(self):
        r"""
        Return a representation of this node built from dictionaries, lists,
        strings, numbers and booleans, suitable for `json.dumps()`.
        """
        d = {'nodetype': self.nodetype}
        for f in self._fields:
            d[f] = _to_json(getattr(self, f))
        if self.position is not None:
            d['position'] = list(self.position)
        if self.render_info:
            d['render_info'] = dict(self.render_info)
        return d


def _to_json(x):
    if isinstance(x, LatexNode):
        return x.to_json_object()
    if isinstance(x, (list, tuple)):
        return [_to_json(y) for y in x]
    return x


def _nodelist(content):
    if content is None:
        return []
    return list(content)


class RootNode(LatexNode):
    nodetype = 'root'
    _fields = ('content',)

    def __init__(self, content=None, **kwargs):
        super().__init__(**kwargs)
        self.content = _nodelist(content)


class GroupNode(LatexNode):
    r"""
    A TeX group ``{...}``.
    """
    nodetype = 'group'
    _fields = ('content',)

    def __init__(self, content=None, **kwargs):
        super().__init__(**kwargs)
        self.content = _nodelist(content)


class MacroNode(LatexNode):
    r"""
    A macro invocation ``\name``.

    The attribute `args` is a list of :py:class:`ArgumentNode` instances, one
    per entry of the macro's signature, or `None` if no signature was
    attached to this macro (unknown macro, or a bare macro used as an
    argument token).
    """
    nodetype = 'macro'
    _fields = ('name', 'args')

    def __init__(self, name, args=None, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.args = list(args) if args is not None else None


class EnvironmentNode(LatexNode):
    r"""
    An environment ``\begin{name}...\end{name}``.  The arguments given right
    after ``\begin{name}`` are stored in `args` (same conventions as for
    :py:class:`MacroNode`), the body in `content`.

    Any whitespace written between ``\begin`` (resp. ``\end``) and the brace
    holding the name, as in ``\begin {itemize}``, is kept in `begin_space`
    (resp. `end_space`) for printing only; it does not take part in node
    comparison.
    """
    nodetype = 'environment'
    _fields = ('name', 'args', 'content')

    def __init__(self, name, content=None, args=None, begin_space='', end_space='',
                 **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.content = _nodelist(content)
        self.args = list(args) if args is not None else None
        self.begin_space = begin_space
        self.end_space = end_space


class VerbatimNode(LatexNode):
    r"""
    A verbatim-like environment whose body is kept as a raw string.
    `begin_space` and `end_space` are as for :py:class:`EnvironmentNode`.
    """
    nodetype = 'verbatim'
    _fields = ('name', 'content')

    def __init__(self, name, content='', begin_space='', end_space='', **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.content = content
        self.begin_space = begin_space
        self.end_space = end_space


class VerbNode(LatexNode):
    r"""
    Inline verbatim, e.g. ``\verb|x_1|`` or ``\verb*+a b+``.
    """
    nodetype = 'verb'
    _fields = ('name', 'star', 'delimiter', 'content')

    def __init__(self, name='verb', content='', delimiter='|', star=False, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.star = star
        self.delimiter = delimiter
        self.content = content


class TextNode(LatexNode):
    nodetype = 'text'
    _fields = ('content',)

    def __init__(self, content, **kwargs):
        super().__init__(**kwargs)
        self.content = content


class WhitespaceNode(LatexNode):
    r"""
    A run of whitespace that does not contain a blank line.  The raw
    whitespace is kept in `content` so that printing reproduces the source.
    """
    nodetype = 'whitespace'
    _fields = ('content',)

    def __init__(self, content=' ', **kwargs):
        super().__init__(**kwargs)
        self.content = content


class ParbreakNode(LatexNode):
    nodetype = 'parbreak'
    _fields = ('content',)

    def __init__(self, content='\n\n', **kwargs):
        super().__init__(**kwargs)
        self.content = content


class CommentNode(LatexNode):
    r"""
    A comment ``%...``.  The text after the percent sign is in `content`;
    `post_space` holds the newline and the indentation of the following line
    that the comment swallows.
    """
    nodetype = 'comment'
    _fields = ('content', 'post_space')

    def __init__(self, content='', post_space='', **kwargs):
        super().__init__(**kwargs)
        self.content = content
        self.post_space = post_space


class MathNode(LatexNode):
    r"""
    Inline (``$...$``, ``\(...\)``) or display (``$$...$$``, ``\[...\]``)
    math.
    """
    nodetype = 'math'
    _fields = ('display', 'delimiters', 'content')

    def __init__(self, content=None, display=False, delimiters=None, **kwargs):
        super().__init__(**kwargs)
        self.content = _nodelist(content)
        self.display = display
        if delimiters is None:
            delimiters = (r'\[', r'\]') if display else ('$', '$')
        self.delimiters = tuple(delimiters)


class ArgumentNode(LatexNode):
    r"""
    An argument bound to a macro or environment.

    `open_mark` and `close_mark` are the delimiters as they appear in the
    source (``'{'``/``'}'``, ``'['``/``']'``, or empty for single-token
    arguments).  An optional argument that was not given is stored as a
    *blank* argument: empty marks, empty content.  A star that is present is
    stored with content ``[TextNode('*')]`` and empty marks.

    The whitespace and comments that separated the argument from the
    preceding token in the source are kept in `pre_space`, for printing only;
    like `position`, it is not part of the node's structure.
    """
    nodetype = 'argument'
    _fields = ('open_mark', 'close_mark', 'content')

    def __init__(self, content=None, open_mark='', close_mark='', pre_space='',
                 **kwargs):
        super().__init__(**kwargs)
        self.pre_space = pre_space
        self.content = _nodelist(content)
        self.open_mark = open_mark
        self.close_mark = close_mark

    def is_blank(self):
        return not self.open_mark and not self.close_mark and not self.content


class PlaceholderNode(LatexNode):
    r"""
    A reference ``#n`` to an argument inside a macro substitution body.
    """
    nodetype = 'placeholder'
    _fields = ('number',)

    def __init__(self, number, **kwargs):
        super().__init__(**kwargs)
        self.number = number


class ErrorNode(LatexNode):
    r"""
    Marks a region that could not be parsed as expected, e.g. a missing
    mandatory argument (`kind` is then ``'MalformedArgument'``).  The raw
    source of the region, if any, is kept in `content` and printed verbatim.
    """
    nodetype = 'error'
    _fields = ('kind', 'message', 'content')

    def __init__(self, message, kind='MalformedArgument', content='', **kwargs):
        super().__init__(**kwargs)
        self.message = message
        self.kind = kind
        self.content = content


#: For each node type, the fields that hold child node lists, in traversal
#: order (arguments before content).
CHILD_LIST_FIELDS = {
    'root': ('content',),
    'group': ('content',),
    'macro': ('args',),
    'environment': ('args', 'content'),
    'math': ('content',),
    'argument': ('content',),
}


def child_lists(node):
    r"""
    Yield ``(key, nodelist)`` for each child node list of `node`, in traversal
    order.  Missing argument lists (`args is None`) are skipped.
    """
    for key in CHILD_LIST_FIELDS.get(node.nodetype, ()):
        lst = getattr(node, key)
        if lst is not None:
            yield key, lst


def clone(x):
    r"""
    Return a deep copy of a node or of a list of nodes.  The copy shares no
    node with the original.
    """
    return copy.deepcopy(x)


def get_args_content(node):
    r"""
    Return a list with, for each argument of the macro or environment `node`,
    the argument's content node list, or `None` if the argument is blank
    (optional argument not given).  Returns an empty list if no arguments are
    attached.
    """
    if node.args is None:
        return []
    return [None if a.is_blank() else a.content for a in node.args]


def update_render_info(node, render_info):
    r"""
    Merge the hints from `render_info` into `node.render_info`.  Returns the
    node.
    """
    if render_info:
        node.render_info.update(render_info)
    return node
