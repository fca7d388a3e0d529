r"""
Exceptions raised by the syntax tree engine.
"""


class LatexAstError(Exception):
    r"""
    Base class for all errors raised by `latexast`.
    """
    pass


class InvalidSignature(LatexAstError):
    r"""
    Raised when an argument signature string (e.g. ``"s o m"``) cannot be
    parsed.
    """
    def __init__(self, signature, reason):
        self.signature = signature
        self.reason = reason
        super().__init__("Invalid argument signature {!r}: {}".format(signature, reason))


class UnboundPlaceholder(LatexAstError):
    r"""
    Raised when a macro body refers to an argument ``#n`` that the macro
    signature does not define.
    """
    def __init__(self, macroname, number):
        self.macroname = macroname
        self.number = number
        super().__init__(
            "Replacement text of ‘\\{}’ refers to argument #{} which is not "
            "defined by its signature".format(macroname, number)
        )


class ExpansionDepthExceeded(LatexAstError):
    r"""
    Raised when expanding user-defined macros recurses deeper than the allowed
    ceiling.  The attribute `chain` holds the names of the macros being
    expanded, outermost first.
    """
    def __init__(self, chain, max_depth=None):
        self.chain = list(chain)
        self.max_depth = max_depth
        super().__init__(
            "Macro expansion exceeded the maximum depth{}: {}".format(
                ' ({})'.format(max_depth) if max_depth is not None else '',
                ' -> '.join('\\'+name for name in self.chain)
            )
        )

    @property
    def macroname(self):
        return self.chain[-1] if self.chain else None


class MalformedArgument(LatexAstError):
    r"""
    Raised in strict mode when a mandatory argument could not be found where
    the macro or environment signature expects it.  In tolerant mode the
    parser stores an ``error`` node instead.
    """
    def __init__(self, macroname, argspec, position=None):
        self.macroname = macroname
        self.argspec = argspec
        self.position = position
        super().__init__(
            "Missing mandatory argument ‘{}’ for ‘\\{}’{}".format(
                argspec, macroname,
                ' at position {}'.format(position) if position is not None else ''
            )
        )
