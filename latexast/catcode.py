r"""
Macro names with ``@``, ``_`` or ``:`` in them.

The tokenizer reads macro names the way TeX does with its default category
codes: a backslash followed by letters.  After ``\makeatletter``, ``@`` is a
letter too, and after ``\ExplSyntaxOn`` so are ``_`` and ``:``.  A macro such
as ``\foo@bar`` or ``\seq_new:N`` is then first read as ``\foo`` followed by
the text ``@bar``.  The functions here glue such pieces back together.
"""

import re
import logging

logger = logging.getLogger(__name__)

from . import match
from . import nodes as latexnodes


AT_LETTER_CHARS = frozenset('@')

EXPL3_CHARS = frozenset('_:')

_toggles = {
    'makeatletter': ('at_letter', True),
    'makeatother': ('at_letter', False),
    'ExplSyntaxOn': ('expl3', True),
    'ExplSyntaxOff': ('expl3', False),
}


def _check_chars(chars):
    chars = frozenset(chars)
    for c in chars:
        if len(c) != 1:
            raise ValueError("Only single characters can be made part of macro names, "
                             "not ‘{}’".format(c))
    return chars


def _name_rx(chars):
    return re.compile(r'[a-zA-Z' + ''.join(re.escape(c) for c in sorted(chars)) + r']+')


def _can_merge(macro, text, chars, rx):
    if not match.any_macro(macro) or macro.args is not None:
        return False
    if not match.any_string(text) or not text.content:
        return False
    if rx.fullmatch(macro.name) is None:
        # control symbols like \\ or \, never grow
        return False
    return macro.name[-1] in chars or text.content[0] in chars


def _merge_in_list(nodes, chars):
    rx = _name_rx(chars)
    j = 0
    while j < len(nodes) - 1:
        macro, text = nodes[j], nodes[j+1]
        if _can_merge(macro, text, chars, rx):
            m = rx.match(text.content)
            if m is not None:
                logger.debug("Reading ‘\\%s%s’ as a single macro name",
                             macro.name, m.group())
                macro.name += m.group()
                rest = text.content[m.end():]
                if macro.position is not None and text.position is not None:
                    macro.position = (macro.position[0], text.position[0] + m.end())
                if rest:
                    position = None
                    if text.position is not None:
                        position = (text.position[0] + m.end(), text.position[1])
                    nodes[j+1] = latexnodes.TextNode(rest, position=position)
                else:
                    del nodes[j+1]
        j += 1


def has_reparsable_macro_names(nodes, chars):
    r"""
    Whether the node list `nodes`, or any node list below it, has a macro
    directly followed by text that :py:func:`reparse_macro_names` would merge
    into its name.  Nothing is modified.
    """
    chars = _check_chars(chars)
    rx = _name_rx(chars)

    def walk(lst):
        for j, n in enumerate(lst):
            if j + 1 < len(lst) and _can_merge(n, lst[j+1], chars, rx):
                return True
            for key, sub in latexnodes.child_lists(n):
                if walk(sub):
                    return True
        return False

    return walk(nodes)


def reparse_macro_names(nodes, chars):
    r"""
    Merge into the name of each macro of `nodes` (a node list, modified in
    place, and all node lists below it) the text that directly follows it, as
    long as it consists of letters and of the characters in `chars`.  A macro
    is only extended if its name ends with one of `chars` or if the text
    starts with one of them.

    For instance, with ``chars='_:'``, ``\foo_bar:Nn`` becomes a single macro
    named ``foo_bar:Nn``.

    Only macros without attached arguments are considered, so this must run
    before arguments are attached.
    """
    chars = _check_chars(chars)

    def walk(lst):
        _merge_in_list(lst, chars)
        for n in lst:
            for key, sub in latexnodes.child_lists(n):
                walk(sub)

    walk(nodes)


def reparse_at_letter_and_expl3_regions(nodes, *, at_letter=False, expl3=False):
    r"""
    Reparse macro names in the node list `nodes` (modified in place) between
    ``\makeatletter`` and ``\makeatother``, where ``@`` belongs to macro
    names, and between ``\ExplSyntaxOn`` and ``\ExplSyntaxOff``, where ``_``
    and ``:`` do.  A region that is not closed extends to the end of its
    node list, and applies to the node lists nested in it.

    If `at_letter` (resp. `expl3`) is `True`, the corresponding characters
    belong to macro names everywhere, as if the whole document were one such
    region.
    """
    def walk(lst, flags):
        flags = dict(flags)
        j = 0
        while j < len(lst):
            n = lst[j]
            if match.any_macro(n) and n.name in _toggles:
                key, value = _toggles[n.name]
                flags[key] = value
                j += 1
                continue
            chars = _chars_for(**flags)
            if chars and j + 1 < len(lst):
                # at most the next node gets merged into this one
                window = lst[j:j+2]
                _merge_in_list(window, chars)
                lst[j:j+2] = window
            for key, sub in latexnodes.child_lists(lst[j]):
                walk(sub, flags)
            j += 1

    walk(nodes, {'at_letter': at_letter, 'expl3': expl3})


def _chars_for(at_letter, expl3):
    chars = frozenset()
    if at_letter:
        chars |= AT_LETTER_CHARS
    if expl3:
        chars |= EXPL3_CHARS
    return chars
