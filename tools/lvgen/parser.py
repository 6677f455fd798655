"""
Parser: recursive-descent parser for rpcgen protocol files.

Recognizes the XDR language (RFC 4506) plus rpcgen's program/version/procedure
blocks.  Only ``const`` and ``enum`` declarations produce symbols; they are
handed to an ``Accumulator`` as soon as they are recognized.  Everything else
is checked for syntax and counted.
"""

import logging
from typing import Iterable, Optional

from .errors import LexicalError, ParseError
from .lexer import Token, KEYWORDS, TOK_IDENT, TOK_INTEGER, TOK_HEX, TOK_EOF, TOK_ERROR
from .symbols import Accumulator, Generator

logger = logging.getLogger(__name__)

_CONSTANT = (TOK_INTEGER, TOK_HEX)
_VALUE = (TOK_INTEGER, TOK_HEX, TOK_IDENT)
_INTEGER_TYPES = ("INT", "HYPER", "SHORT", "CHAR")
_SIMPLE_TYPES = _INTEGER_TYPES + ("FLOAT", "DOUBLE", "BOOL")

_KIND_NAMES = {
    TOK_IDENT:   "identifier",
    TOK_INTEGER: "integer",
    TOK_HEX:     "integer",
    TOK_EOF:     "end of input",
}
_KEYWORD_SPELLING = {kind: word for word, kind in KEYWORDS.items()}


def _kind_name(kind: str) -> str:
    if kind in _KIND_NAMES:
        return _KIND_NAMES[kind]
    return repr(_KEYWORD_SPELLING.get(kind, kind))


class Parser:
    """
    Recursive-descent parser for rpcgen protocol files.

    Accepts any iterable of tokens: the list from ``tokenize()`` or a running
    ``Lexer``.  Tokens are pulled one at a time, with one token of lookahead.
    """

    def __init__(self, tokens: Iterable[Token],
                 accumulator: Optional[Accumulator] = None):
        self._tokens = iter(tokens)
        self._lookahead: Optional[Token] = None
        self.acc = accumulator if accumulator is not None else Accumulator()
        self.stats = {
            "typedefs":   0,
            "structs":    0,
            "unions":     0,
            "programs":   0,
            "procedures": 0,
        }

    # ── Token helpers ────────────────────────────────────────────────

    def peek(self) -> Token:
        if self._lookahead is None:
            try:
                tok = next(self._tokens)
            except StopIteration:
                raise ParseError("unexpected end of token stream") from None
            if tok.kind == TOK_ERROR:
                if tok.value == "/*":
                    what = "unterminated comment"
                else:
                    what = f"unexpected character {tok.value!r}"
                raise LexicalError(
                    f"Line {tok.line}, column {tok.column}: {what}",
                    tok.line, tok.column, tok.value)
            self._lookahead = tok
        return self._lookahead

    def advance(self) -> Token:
        tok = self.peek()
        self._lookahead = None
        return tok

    def at(self, *kinds: str) -> bool:
        return self.peek().kind in kinds

    def expect(self, *kinds: str) -> Token:
        tok = self.peek()
        if tok.kind not in kinds:
            raise self._error(tok, " or ".join(
                dict.fromkeys(_kind_name(k) for k in kinds)))
        return self.advance()

    def _error(self, tok: Token, expected: str) -> ParseError:
        return ParseError(
            f"Line {tok.line}, column {tok.column}: "
            f"expected {expected}, got {tok.describe()}",
            tok.line, tok.column)

    # ── Top-level ────────────────────────────────────────────────────

    def parse(self) -> Generator:
        while not self.at(TOK_EOF):
            self._parse_definition()
        self.expect(TOK_EOF)

        model = self.acc.model
        logger.debug("parsed %d enums, %d consts, %s",
                     len(model.enums), len(model.consts),
                     ", ".join(f"{v} {k}" for k, v in self.stats.items()))
        return model

    def _parse_definition(self):
        tok = self.peek()
        if tok.kind == "CONST":
            self._parse_const()
        elif tok.kind == "TYPEDEF":
            self.advance()
            self._parse_declaration()
            self.expect(";")
            self.stats["typedefs"] += 1
        elif tok.kind == "ENUM":
            self.advance()
            self.expect(TOK_IDENT)
            self._parse_enum_body()
            self.expect(";")
        elif tok.kind == "STRUCT":
            self.advance()
            self.expect(TOK_IDENT)
            self._parse_struct_body()
            self.expect(";")
            self.stats["structs"] += 1
        elif tok.kind == "UNION":
            self.advance()
            self.expect(TOK_IDENT)
            self._parse_union_body()
            self.expect(";")
            self.stats["unions"] += 1
        elif tok.kind == "PROGRAM":
            self._parse_program()
        else:
            raise self._error(
                tok, "'const', 'typedef', 'enum', 'struct', 'union' or 'program'")

    # ── Constants / enums ────────────────────────────────────────────

    def _parse_const(self):
        self.expect("CONST")
        name_tok = self.expect(TOK_IDENT)
        self.expect("=")
        val_tok = self.expect(*_VALUE)
        self.expect(";")
        self.acc.add_const(name_tok.value, val_tok.value)

    def _parse_enum_body(self):
        self.expect("{")
        self.acc.start_enum_block()
        while True:
            name_tok = self.expect(TOK_IDENT)
            if self.at("="):
                self.advance()
                val_tok = self.expect(*_VALUE)
                self.acc.add_enum_explicit(name_tok.value, val_tok.value)
            else:
                self.acc.add_enum_auto(name_tok.value)
            if not self.at(","):
                break
            self.advance()
            if self.at("}"):
                break  # trailing comma
        self.expect("}")

    # ── Structs / unions ─────────────────────────────────────────────

    def _parse_struct_body(self):
        self.expect("{")
        while True:
            self._parse_declaration()
            self.expect(";")
            if self.at("}"):
                break
        self.expect("}")

    def _parse_union_body(self):
        self.expect("SWITCH")
        self.expect("(")
        self._parse_declaration()
        self.expect(")")
        self.expect("{")

        if not self.at("CASE"):
            raise self._error(self.peek(), "'case'")
        while self.at("CASE"):
            while self.at("CASE"):
                self.advance()
                self.expect(*_VALUE)
                self.expect(":")
            self._parse_declaration()
            self.expect(";")

        if self.at("DEFAULT"):
            self.advance()
            self.expect(":")
            self._parse_declaration()
            self.expect(";")
        self.expect("}")

    # ── Declarations / types ─────────────────────────────────────────

    def _parse_declaration(self):
        tok = self.peek()
        if tok.kind == "VOID":
            self.advance()
            return

        if tok.kind == "OPAQUE":
            self.advance()
            self.expect(TOK_IDENT)
            if self.at("["):
                self._parse_fixed_array()
            else:
                self._parse_variable_array()
            return

        if tok.kind == "STRING":
            self.advance()
            self.expect(TOK_IDENT)
            self._parse_variable_array()
            return

        self._parse_type_spec()
        if self.at("*"):
            # Optional data: "type *name", no array suffix.
            self.advance()
            self.expect(TOK_IDENT)
            return

        self.expect(TOK_IDENT)
        if self.at("["):
            self._parse_fixed_array()
        elif self.at("<"):
            self._parse_variable_array()

    def _parse_fixed_array(self):
        self.expect("[")
        self.expect(*_VALUE)
        self.expect("]")

    def _parse_variable_array(self):
        self.expect("<")
        if not self.at(">"):
            self.expect(*_VALUE)
        self.expect(">")

    def _parse_type_spec(self):
        tok = self.peek()
        if tok.kind == "UNSIGNED":
            self.advance()
            if self.at(*_INTEGER_TYPES):
                self.advance()
        elif tok.kind in _SIMPLE_TYPES or tok.kind == TOK_IDENT:
            self.advance()
        elif tok.kind in ("ENUM", "STRUCT", "UNION"):
            self.advance()
            if self.at(TOK_IDENT):
                # Reference to a named type, e.g. "struct foo *next".
                self.advance()
            elif tok.kind == "ENUM":
                self._parse_enum_body()
            elif tok.kind == "STRUCT":
                self._parse_struct_body()
            else:
                self._parse_union_body()
        else:
            raise self._error(tok, "type")

    # ── Programs ─────────────────────────────────────────────────────

    def _parse_program(self):
        self.expect("PROGRAM")
        self.expect(TOK_IDENT)
        self.expect("{")
        while True:
            self._parse_version()
            if self.at("}"):
                break
        self.expect("}")
        self.expect("=")
        self.expect(*_CONSTANT)
        self.expect(";")
        self.stats["programs"] += 1

    def _parse_version(self):
        self.expect("VERSION")
        self.expect(TOK_IDENT)
        self.expect("{")
        while True:
            self._parse_procedure()
            if self.at("}"):
                break
        self.expect("}")
        self.expect("=")
        self.expect(*_CONSTANT)
        self.expect(";")

    def _parse_procedure(self):
        self._parse_proc_type()
        self.expect(TOK_IDENT)
        self.expect("(")
        self._parse_proc_type()
        while self.at(","):
            self.advance()
            self._parse_type_spec()
        self.expect(")")
        self.expect("=")
        self.expect(*_CONSTANT)
        self.expect(";")
        self.stats["procedures"] += 1

    def _parse_proc_type(self):
        if self.at("VOID"):
            self.advance()
        else:
            self._parse_type_spec()


def parse(tokens: Iterable[Token],
          accumulator: Optional[Accumulator] = None) -> Generator:
    """Parse a token stream and return the collected symbols."""
    return Parser(tokens, accumulator).parse()
