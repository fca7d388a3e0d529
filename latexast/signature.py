r"""
Argument signatures of macros and environments.

A signature is a compact string that describes, in order, the arguments a
macro or an environment accepts, using the letters of the LaTeX3 `xparse`
package::

  s          optional star '*'
  m          mandatory argument, {...} or a single token
  o          optional argument [...]
  O{dflt}    optional argument [...] with a default value
  d<>        optional argument with custom delimiters, here <...>
  D<>{dflt}  same, with a default value
  r<>        mandatory argument with custom delimiters
  R<>{dflt}  same, with a default value
  t+         optional literal token, here '+'

Each letter may be prefixed by '!' (the argument may not be preceded by
whitespace) and/or '+' (a "long" argument, accepted and recorded only).
Letters can be separated by whitespace or written compactly, so ``"s o m"``
and ``"som"`` are the same signature.

The N-th spec of a signature always binds to the N-th argument of the node.
"""

import functools
import logging

logger = logging.getLogger(__name__)

from .errors import InvalidSignature


class ArgSpec:
    r"""
    Specification of a single argument.

    .. py:attribute:: letter

       The signature letter this spec was parsed from (``'m'``, ``'o'``,
       ``'D'``, ...).

    .. py:attribute:: kind

       One of ``'star'``, ``'token'``, ``'mandatory'`` or ``'optional'``.

    .. py:attribute:: open_mark, close_mark

       The delimiters of the argument.  For ``'star'`` and ``'token'`` kinds,
       `open_mark` is the token itself and `close_mark` is empty.

    .. py:attribute:: default

       The default value (LaTeX source string) for ``O``, ``D`` and ``R``
       specs, `None` otherwise.
    """

    _letter_kinds = {
        's': 'star',
        't': 'token',
        'm': 'mandatory',
        'r': 'mandatory',
        'R': 'mandatory',
        'o': 'optional',
        'O': 'optional',
        'd': 'optional',
        'D': 'optional',
    }

    def __init__(self, letter, open_mark='', close_mark='', default=None,
                 no_leading_whitespace=False, long=False):
        super().__init__()
        self.letter = letter
        self.kind = self._letter_kinds[letter]
        self.open_mark = open_mark
        self.close_mark = close_mark
        self.default = default
        self.no_leading_whitespace = no_leading_whitespace
        self.long = long

    @property
    def is_optional(self):
        return self.kind != 'mandatory'

    def to_signature(self):
        r"""
        Return the signature token for this spec, e.g. ``'D<>{x}'``.
        """
        s = ''
        if self.long:
            s += '+'
        if self.no_leading_whitespace:
            s += '!'
        s += self.letter
        if self.letter == 't':
            s += self.open_mark
        elif self.letter in 'dDrR':
            s += self.open_mark + self.close_mark
        if self.letter in 'ODR':
            s += '{' + self.default + '}'
        return s

    def __eq__(self, other):
        if not isinstance(other, ArgSpec):
            return NotImplemented
        return self.to_signature() == other.to_signature()

    def __hash__(self):
        return hash(self.to_signature())

    def __repr__(self):
        return "ArgSpec({!r})".format(self.to_signature())


def _read_braced_default(spec, i):
    # spec[i] must be '{'; returns (default, index after closing brace)
    if spec[i:i+1] != '{':
        raise InvalidSignature(spec, "expected ‘{{’ with a default value at position {}"
                               .format(i))
    depth = 0
    j = i
    while j < len(spec):
        c = spec[j]
        if c == "\\":
            j += 2
            continue
        if c == "{":
            depth += 1
        elif c == '}':
            depth -= 1
            if depth == 0:
                return spec[i+1:j], j+1
        j += 1
    raise InvalidSignature(spec, "unterminated default value starting at position {}"
                           .format(i))


def _read_delimiter(spec, i, what):
    c = spec[i:i+1]
    if not c or c.isspace():
        raise InvalidSignature(spec, "expected {} at position {}".format(what, i))
    return c


@functools.lru_cache(maxsize=1024)
def _parse_signature_cached(spec):
    specs = []
    i = 0
    n = len(spec)
    while i < n:
        c = spec[i]
        if c.isspace():
            i += 1
            continue

        no_leading_whitespace = False
        long = False
        while c in '!+':
            if c == '!':
                no_leading_whitespace = True
            else:
                long = True
            i += 1
            if i >= n:
                raise InvalidSignature(spec, "dangling prefix ‘{}’ at end".format(c))
            c = spec[i]

        if c not in ArgSpec._letter_kinds:
            raise InvalidSignature(spec, "unknown argument type ‘{}’ at position {}"
                                   .format(c, i))
        i += 1

        open_mark, close_mark, default = '', '', None
        if c == 's':
            open_mark = '*'
        elif c == 't':
            open_mark = _read_delimiter(spec, i, "a token after ‘t’")
            i += 1
        elif c == 'm':
            open_mark, close_mark = '{', '}'
        elif c in 'oO':
            open_mark, close_mark = '[', ']'
        else:
            # d, D, r, R
            open_mark = _read_delimiter(spec, i, "an opening delimiter")
            close_mark = _read_delimiter(spec, i+1, "a closing delimiter")
            i += 2

        if c in 'ODR':
            default, i = _read_braced_default(spec, i)

        specs.append(ArgSpec(c, open_mark, close_mark, default,
                             no_leading_whitespace=no_leading_whitespace,
                             long=long))

    return tuple(specs)


def parse_signature(spec):
    r"""
    Parse the signature string `spec` and return a list of
    :py:class:`ArgSpec` instances, one per argument.

    Raises :py:exc:`~latexast.errors.InvalidSignature` if the string cannot
    be parsed.  An empty (or `None`) signature yields an empty list.
    """
    if not spec:
        return []
    return list(_parse_signature_cached(spec))


def print_signature(specs):
    r"""
    Serialize a list of :py:class:`ArgSpec` back to a signature string, with
    tokens separated by single spaces.
    """
    return " ".join(a.to_signature() for a in specs)


_argspec_chars = {
    '*': 's',
    '[': 'o',
    '{': 'm',
}

def signature_from_argspec(argspec):
    r"""
    Convert a pylatexenc-style argspec string, where ``'*'`` is an optional
    star, ``'['`` an optional argument and ``'{'`` a mandatory argument, into
    the equivalent signature string.  E.g. ``'*[{'`` gives ``'s o m'``.
    """
    try:
        return " ".join(_argspec_chars[c] for c in argspec)
    except KeyError as e:
        raise InvalidSignature(argspec, "invalid argspec character {}".format(e))
