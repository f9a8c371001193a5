"""Exception types raised by the lexer toolkit."""


class LexerError(RuntimeError):
    """Raised when a rule, pattern or input cannot be processed."""