"""
Exceptions raised while generating bindings from a protocol file.
"""


class LvgenError(Exception):
    """Base class for every error that aborts a generation run."""
    pass


class LexicalError(LvgenError):
    """Raised when the tokenizer hits a character it does not recognize."""

    def __init__(self, message: str, line: int, column: int, char: str):
        super().__init__(message)
        self.line = line
        self.column = column
        self.char = char


class ParseError(LvgenError):
    """Raised when the token stream does not match the protocol grammar."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column


class LiteralError(LvgenError):
    """Raised when a const or enum value is not a valid 64-bit integer."""

    def __init__(self, message: str, name: str, literal: str):
        super().__init__(message)
        self.name = name
        self.literal = literal


class ConfigError(LvgenError):
    """Raised when a generator config file fails validation."""
    pass


class InputError(LvgenError):
    """Raised when the protocol input cannot be decoded as UTF-8."""

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset
