"""
Lexer: tokenizes rpcgen protocol source text into a stream of tokens.

``scan()`` is a lazy generator over the source text.  ``Lexer`` runs it on a
background thread and hands tokens to the parser through a bounded queue, so
scanning stays one token ahead of parsing.
"""

import logging
import queue
import string
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

# Token kinds.  Keywords use their upper-cased spelling and single-character
# tokens use the character itself.
TOK_IDENT   = "IDENT"
TOK_INTEGER = "INTEGER"
TOK_HEX     = "HEX"
TOK_EOF     = "EOF"
TOK_ERROR   = "ERROR"

# Keyword spelling → token kind.  Matching is case-sensitive.
KEYWORDS = MappingProxyType({word: word.upper() for word in (
    "hyper",
    "int",
    "short",
    "char",
    "bool",
    "case",
    "const",
    "default",
    "double",
    "enum",
    "float",
    "opaque",
    "string",
    "struct",
    "switch",
    "typedef",
    "union",
    "unsigned",
    "void",
    "program",
    "version",
)})

# Characters that are tokens on their own.
ONE_RUNE_TOKENS = frozenset("{}[]<>(),=;:*")

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_REST  = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS      = frozenset(string.digits)
_HEX_DIGITS  = frozenset(string.hexdigits)

# How long a blocked producer or consumer waits before re-checking state.
_POLL_INTERVAL = 0.05


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    column: int

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.kind == TOK_EOF:
            return "end of input"
        return repr(self.value)


def scan(text: str) -> Iterator[Token]:
    """
    Lazily convert protocol source text into tokens.

    Skips whitespace, ``/* */`` and ``//`` comments, and ``%`` passthrough
    lines.  The sequence always ends with exactly one EOF or ERROR token;
    invalid input is reported as an ERROR token, never raised.
    """
    i = 0
    line = 1
    line_start = 0
    n = len(text)

    while i < n:
        c = text[i]
        col = i - line_start + 1

        # Newlines
        if c == "\n":
            i += 1
            line += 1
            line_start = i
            continue

        # Whitespace
        if c in " \t\r\f\v":
            i += 1
            continue

        # Single-line comment
        if text.startswith("//", i):
            while i < n and text[i] != "\n":
                i += 1
            continue

        # Block comment
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                yield Token(TOK_ERROR, "/*", line, col)
                return
            nl = text.rfind("\n", i, end)
            if nl != -1:
                line += text.count("\n", i, end)
                line_start = nl + 1
            i = end + 2
            continue

        # Passthrough line, e.g. "%#include <libvirt/libvirt.h>"
        if c == "%" and not text[line_start:i].strip():
            while i < n and text[i] != "\n":
                i += 1
            continue

        # Symbols
        if c in ONE_RUNE_TOKENS:
            yield Token(c, c, line, col)
            i += 1
            continue

        # Hex literal
        if text.startswith("0x", i):
            j = i + 2
            while j < n and text[j] in _HEX_DIGITS:
                j += 1
            if j == i + 2:
                # Report the first non-hex character, or the bare prefix at
                # end of input.
                if j < n:
                    yield Token(TOK_ERROR, text[j], line, col + 2)
                else:
                    yield Token(TOK_ERROR, "0x", line, col)
                return
            yield Token(TOK_HEX, text[i:j], line, col)
            i = j
            continue

        # Decimal literal, optionally negative
        if c in _DIGITS or (c == "-" and i + 1 < n and text[i + 1] in _DIGITS):
            j = i + 1
            while j < n and text[j] in _DIGITS:
                j += 1
            yield Token(TOK_INTEGER, text[i:j], line, col)
            i = j
            continue

        # Identifier / keyword
        if c in _IDENT_START:
            j = i + 1
            while j < n and text[j] in _IDENT_REST:
                j += 1
            word = text[i:j]
            yield Token(KEYWORDS.get(word, TOK_IDENT), word, line, col)
            i = j
            continue

        yield Token(TOK_ERROR, c, line, col)
        return

    yield Token(TOK_EOF, "", line, i - line_start + 1)


def tokenize(text: str) -> List[Token]:
    """Scan the whole source text and return its tokens as a list."""
    return list(scan(text))


class Lexer:
    """
    Concurrent token producer.

    ``scan()`` runs on a daemon thread and pushes tokens into a queue holding
    at most ``depth`` tokens; the producer blocks while the queue is full.
    Iterating the lexer yields tokens up to and including the EOF or ERROR
    token.  ``cancel()`` releases a blocked producer so the thread exits even
    if the consumer stops reading early; use the lexer as a context manager
    to make that happen on every exit path::

        with Lexer(text) as lexer:
            model = Parser(lexer, acc).parse()
    """

    def __init__(self, text: str, depth: int = 1):
        self._text = text
        self._queue: "queue.Queue[Token]" = queue.Queue(maxsize=depth)
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._finished = False
        self.produced = 0

    # ── Producer ─────────────────────────────────────────────────────

    def start(self) -> "Lexer":
        if self._thread is not None:
            raise RuntimeError("lexer already started")
        self._thread = threading.Thread(target=self._run, name="lvgen-lexer",
                                        daemon=True)
        self._thread.start()
        return self

    def _run(self):
        for tok in scan(self._text):
            if not self._put(tok):
                logger.debug("lexer cancelled after %d tokens", self.produced)
                return
            self.produced += 1
        logger.debug("lexer finished: %d tokens", self.produced)

    def _put(self, tok: Token) -> bool:
        while not self._cancelled.is_set():
            try:
                self._queue.put(tok, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    # ── Consumer ─────────────────────────────────────────────────────

    def __iter__(self) -> Iterator[Token]:
        if self._thread is None:
            self.start()
        while not self._finished:
            tok = self._next()
            if tok.kind in (TOK_EOF, TOK_ERROR):
                self._finished = True
            yield tok

    def _next(self) -> Token:
        while True:
            try:
                return self._queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                pass
            if self._cancelled.is_set():
                raise RuntimeError("lexer was cancelled")
            if not self._thread.is_alive():
                # The producer may have queued its last token just before
                # exiting.
                try:
                    return self._queue.get_nowait()
                except queue.Empty:
                    raise RuntimeError("lexer stopped before end of input")

    # ── Lifecycle ────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def cancel(self):
        """Signal the producer to stop at its next hand-off."""
        self._cancelled.set()

    def close(self, timeout: Optional[float] = None):
        """Cancel the producer and wait for its thread to exit."""
        self.cancel()
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> "Lexer":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
