r"""
Expansion of macros and environments defined by substitution bodies.

A :py:class:`MacroDefinition` couples an argument signature with a body in
which ``#1``, ..., ``#9`` refer to the arguments.  Expanding an invocation
binds its arguments by position and returns a fresh copy of the body in
which every placeholder is replaced by its own copy of the bound argument
content.  Two occurrences of ``#1`` never share nodes, so that later
rewrites of one occurrence cannot affect the other.

:py:func:`expand_macros` applies a set of definitions to a whole tree,
expanding the results again until no invocation is left.  Runaway recursion
(``\newcommand\foo{\foo}``) is stopped after `max_depth` nested expansions
with :py:exc:`~latexast.errors.ExpansionDepthExceeded`.

:py:func:`expand_user_defined_macros` finds the document's own
``\newcommand``, ``\newenvironment`` and ``\NewDocumentCommand``
definitions and expands them.
"""

import re
import logging

logger = logging.getLogger(__name__)

from . import nodes as latexnodes
from . import match
from .arguments import attach_arguments
from .errors import UnboundPlaceholder, ExpansionDepthExceeded
from .parser import get_default_parser
from .printer import print_raw
from .replace import replace_node
from .signature import parse_signature
from .visit import visit, SKIP


DEFAULT_MAX_DEPTH = 64

#: Macros that define new macros.  Their arguments are never expanded into.
newcommand_macros = (
    'newcommand', 'renewcommand', 'providecommand', 'DeclareRobustCommand',
)

newenvironment_macros = (
    'newenvironment', 'renewenvironment',
)

xparse_command_macros = (
    'NewDocumentCommand', 'RenewDocumentCommand', 'ProvideDocumentCommand',
    'DeclareDocumentCommand', 'NewExpandableDocumentCommand',
    'RenewExpandableDocumentCommand',
)

xparse_environment_macros = (
    'NewDocumentEnvironment', 'RenewDocumentEnvironment',
    'ProvideDocumentEnvironment', 'DeclareDocumentEnvironment',
)

is_definition_command = match.create_macro_matcher(
    newcommand_macros + newenvironment_macros
    + xparse_command_macros + xparse_environment_macros
)


_rx_substitution = re.compile(r'##|#([1-9])')


def parse_macro_substitutions(nodes):
    r"""
    Return a copy of the node list `nodes` in which ``#1``...``#9`` inside
    text nodes have become :py:class:`~latexast.nodes.PlaceholderNode`
    instances and ``##`` has become a literal ``#``.

    The parser already produces placeholder nodes for ``#n``; this function
    is also needed for bodies built by hand from text nodes.
    """
    def split_text(node, info):
        if not match.any_string(node) or '#' not in node.content:
            return None
        result = []
        buf = []
        p = 0
        for m in _rx_substitution.finditer(node.content):
            buf.append(node.content[p:m.start()])
            p = m.end()
            if m.group(1) is None:
                buf.append('#')
                continue
            if ''.join(buf):
                result.append(latexnodes.TextNode(''.join(buf)))
            buf = []
            result.append(latexnodes.PlaceholderNode(int(m.group(1))))
        buf.append(node.content[p:])
        if ''.join(buf):
            result.append(latexnodes.TextNode(''.join(buf)))
        return result

    return replace_node(latexnodes.clone(nodes), split_text)


def _parse_body(body):
    if body is None:
        return []
    if isinstance(body, str):
        body = get_default_parser().parse_nodes(body)
    elif isinstance(body, latexnodes.LatexNode):
        body = [body]
    return parse_macro_substitutions(list(body))


class _Definition:
    def __init__(self, name, signature, render_info, defaults):
        super().__init__()
        self.name = name
        self.signature = signature or ''
        self.argspecs = parse_signature(self.signature)
        self.render_info = dict(render_info) if render_info else {}

        parser = get_default_parser()
        self.defaults = [
            (parser.parse_nodes(spec.default) if spec.default is not None else None)
            for spec in self.argspecs
        ]
        if defaults:
            for j, d in enumerate(defaults):
                if d is not None:
                    self.defaults[j] = (parser.parse_nodes(d) if isinstance(d, str)
                                        else list(d))

    def table_entry(self):
        r"""
        Return the entry for this definition in a signature table, as used by
        :py:func:`latexast.arguments.attach_arguments`.
        """
        return {'signature': self.signature, 'renderInfo': dict(self.render_info)}

    def bind_arguments(self, invocation):
        r"""
        Return the list of argument contents that placeholders ``#1``,
        ``#2``, ... of `invocation` stand for.
        """
        args = invocation.args or []
        bound = []
        for j, spec in enumerate(self.argspecs):
            arg = args[j] if j < len(args) else None
            if arg is None or arg.is_blank():
                if self.defaults[j] is not None:
                    bound.append(self.defaults[j])
                else:
                    bound.append([])
            else:
                bound.append(arg.content)
        if invocation.args is None and self.argspecs:
            logger.warning("No arguments attached to ‘\\%s’, expanding with empty "
                           "arguments", self.name)
        return bound

    def __repr__(self):
        return "{}(name={!r}, signature={!r})".format(type(self).__name__,
                                                     self.name, self.signature)


class MacroDefinition(_Definition):
    r"""
    A macro defined by a substitution body.

    Arguments:

    - `name`: the macro name, without backslash.

    - `signature`: its argument signature, e.g. ``'O{x} m'``.  Invalid
      signatures raise :py:exc:`~latexast.errors.InvalidSignature`.

    - `body`: the replacement, as a list of nodes or a LaTeX string.

    - `render_info`: render hints for invocations of the macro.

    - `defaults`: optional list, parallel to the signature, of default values
      (LaTeX strings or node lists) overriding those written in the
      signature.
    """
    def __init__(self, name, signature='', body=None, render_info=None, defaults=None):
        super().__init__(name, signature, render_info, defaults)
        self.body = _parse_body(body)


class EnvironmentDefinition(_Definition):
    r"""
    An environment defined by begin and end code.

    The expansion of ``\begin{name}...\end{name}`` is the `begin` code, the
    environment body and the `end` code, enclosed in a group if `group` is
    `True` (LaTeX environments form a scope).  Placeholders in `begin` refer
    to the environment arguments.  Placeholders in `end` are only allowed if
    `args_in_end` is set, as with xparse environments.
    """
    def __init__(self, name, signature='', begin=None, end=None, render_info=None,
                 defaults=None, group=True, args_in_end=False):
        super().__init__(name, signature, render_info, defaults)
        self.begin = _parse_body(begin)
        self.end = _parse_body(end)
        self.group = group
        self.args_in_end = args_in_end


def _substitute(body, bound, name):
    def callback(node, info):
        if node.nodetype != 'placeholder':
            return None
        if node.number > len(bound):
            raise UnboundPlaceholder(name, node.number)
        return latexnodes.clone(bound[node.number-1])

    return replace_node(latexnodes.clone(body), callback)


def expand(invocation, definition):
    r"""
    Return the list of nodes that the macro node `invocation` expands to
    according to the :py:class:`MacroDefinition` `definition`.

    Absent optional arguments bind to their default value, or to nothing.
    Raises :py:exc:`~latexast.errors.UnboundPlaceholder` if the body refers
    to an argument beyond the signature.
    """
    bound = definition.bind_arguments(invocation)
    return _substitute(definition.body, bound, definition.name)


def expand_environment(node, definition):
    r"""
    Return the list of nodes that the environment node `node` expands to
    according to the :py:class:`EnvironmentDefinition` `definition`.
    """
    bound = definition.bind_arguments(node)
    begin = _substitute(definition.begin, bound, definition.name)
    end = _substitute(definition.end, bound if definition.args_in_end else [],
                      definition.name)
    content = begin + list(node.content) + end
    if definition.group:
        return [latexnodes.GroupNode(content)]
    return content


def _definitions_table(definitions):
    if definitions is None:
        return {}
    if isinstance(definitions, dict):
        return dict(definitions)
    table = {}
    for d in definitions:
        table[d.name] = d
    return table


def expand_macros(tree, definitions=(), environments=(), max_depth=DEFAULT_MAX_DEPTH):
    r"""
    Replace every invocation in `tree` of a macro of `definitions` (and
    every environment of `environments`) by its expansion, then expand the
    result again.  Definitions are given as lists of
    :py:class:`MacroDefinition` / :py:class:`EnvironmentDefinition`
    instances or as dictionaries keyed by name; in a list, later definitions
    of the same name win.

    The arguments of the invocations must already be attached (see
    :py:func:`latexast.arguments.attach_arguments`).  Arguments of
    definition commands such as ``\newcommand`` are left alone.

    The tree is rewritten in place and the new tree is returned (see
    :py:func:`latexast.replace.replace_node`).  If expansions nest deeper
    than `max_depth`,
    :py:exc:`~latexast.errors.ExpansionDepthExceeded` is raised with the
    chain of names being expanded.
    """
    mtable = _definitions_table(definitions)
    etable = _definitions_table(environments)
    is_macro = match.create_macro_matcher(mtable)
    is_environment = match.create_environment_matcher(etable)
    msignatures = {name: d.table_entry() for name, d in mtable.items()}
    esignatures = {name: d.table_entry() for name, d in etable.items()}

    def make_callback(chain):
        def callback(node, info):
            if is_definition_command(node):
                return SKIP
            if is_macro(node):
                expand_fn, definition = expand, mtable[node.name]
            elif is_environment(node) and node.nodetype == 'environment':
                expand_fn, definition = expand_environment, etable[node.name]
            else:
                return None

            newchain = chain + (node.name,)
            if len(newchain) > max_depth:
                raise ExpansionDepthExceeded(newchain, max_depth)

            logger.debug("Expanding ‘%s’", node.name)
            expansion = expand_fn(node, definition)
            # invocations written in the body itself
            attach_arguments(expansion, msignatures, esignatures)
            return replace_node(expansion, make_callback(newchain),
                                starting_context=info.context)
        return callback

    return replace_node(tree, make_callback(()))


def _first_macro_name(nodes):
    if not nodes:
        return None
    for n in nodes:
        if match.any_macro(n):
            return n.name
        if match.group(n):
            return _first_macro_name(n.content)
        if not match.whitespace_like(n):
            break
    return None


def _arg(node, j):
    args = node.args or []
    if j >= len(args) or args[j].is_blank():
        return None
    return args[j].content


def _newcommand_signature(node, what):
    r"""
    Return the xparse-style signature ``'O{...} m m'`` equivalent to the
    ``[n][default]`` arguments of a ``\newcommand``-like `node`.
    """
    nargs = _arg(node, 2)
    default = _arg(node, 3)
    n = 0
    if nargs is not None:
        nstr = print_raw(nargs).strip()
        try:
            n = int(nstr)
        except ValueError:
            logger.warning("Invalid number of arguments ‘%s’ in definition of %s",
                           nstr, what)
            return None
    if n == 0:
        return ''
    if default is not None:
        return ' '.join(['O{' + print_raw(default) + '}'] + ['m'] * (n - 1))
    return ' '.join(['m'] * n)


def list_newcommands(tree):
    r"""
    Return the list of :py:class:`MacroDefinition` instances for the macros
    defined in `tree` by ``\newcommand``, ``\renewcommand``,
    ``\providecommand``, ``\DeclareRobustCommand`` and the xparse
    ``\NewDocumentCommand`` family, in document order.  Each definition has two
    extra attributes: `command`, the name of the defining macro, and `node`, the
    defining macro node.

    The arguments of the defining macros must have been attached by the
    parser.  Definitions that cannot be understood are skipped with a
    warning.
    """
    found = []
    is_cmddef = match.create_macro_matcher(newcommand_macros + xparse_command_macros)

    def callback(node, info):
        if not is_cmddef(node) or node.args is None:
            return None

        if node.name in newcommand_macros:
            name = _first_macro_name(_arg(node, 1))
            signature = _newcommand_signature(node, '\\' + str(name)) \
                if name is not None else None
            body = _arg(node, 4)
        else:
            name = _first_macro_name(_arg(node, 0))
            sigarg = _arg(node, 1)
            signature = print_raw(sigarg).strip() if sigarg is not None else ''
            body = _arg(node, 2)

        if name is None or signature is None:
            logger.warning("Couldn't understand definition %s, skipping", print_raw(node))
            return SKIP

        d = MacroDefinition(name, signature, body or [])
        d.command = node.name
        d.node = node
        found.append(d)
        return SKIP

    visit(tree, callback)
    return found


def list_newenvironments(tree):
    r"""
    Return the list of :py:class:`EnvironmentDefinition` instances for the
    environments defined in `tree` by ``\newenvironment``,
    ``\renewenvironment`` and the xparse ``\NewDocumentEnvironment`` family,
    in document order.  Each definition has two extra attributes: `command`, the
    name of the defining macro, and `node`, the defining macro node.
    """
    found = []
    is_envdef = match.create_macro_matcher(newenvironment_macros
                                           + xparse_environment_macros)

    def callback(node, info):
        if not is_envdef(node) or node.args is None:
            return None

        if node.name in newenvironment_macros:
            namearg = _arg(node, 1)
            name = print_raw(namearg).strip() if namearg is not None else None
            signature = _newcommand_signature(node, 'environment ‘{}’'.format(name))
            begin, end = _arg(node, 4), _arg(node, 5)
            args_in_end = False
        else:
            namearg = _arg(node, 0)
            name = print_raw(namearg).strip() if namearg is not None else None
            sigarg = _arg(node, 1)
            signature = print_raw(sigarg).strip() if sigarg is not None else ''
            begin, end = _arg(node, 2), _arg(node, 3)
            args_in_end = True

        if not name or signature is None:
            logger.warning("Couldn't understand definition %s, skipping", print_raw(node))
            return SKIP

        d = EnvironmentDefinition(name, signature, begin or [], end or [],
                                  args_in_end=args_in_end)
        d.command = node.name
        d.node = node
        found.append(d)
        return SKIP

    visit(tree, callback)
    return found


def attach_definition_arguments(tree, definitions=(), environments=()):
    r"""
    Attach the arguments of the invocations in `tree` of the given macro and
    environment definitions.  Returns the tree.
    """
    return attach_arguments(
        tree,
        macros={d.name: d.table_entry() for d in definitions},
        environments={d.name: d.table_entry() for d in environments},
    )


def expand_user_defined_macros(tree, max_depth=DEFAULT_MAX_DEPTH):
    r"""
    Expand the macros and environments that `tree` defines itself (see
    :py:func:`list_newcommands` and :py:func:`list_newenvironments`).

    The expansion is carried out on a copy: the tree given as argument is
    never modified, even if an error is raised.  Returns the expanded copy.
    The definitions themselves are left in the tree.
    """
    tree = latexnodes.clone(tree)
    definitions = list_newcommands(tree)
    environments = list_newenvironments(tree)
    logger.debug("Found %d macro and %d environment definitions",
                 len(definitions), len(environments))
    attach_definition_arguments(tree, definitions, environments)
    return expand_macros(tree, definitions, environments, max_depth=max_depth)
