# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Streaming lexical scanner for ALF sources.

Converts a byte stream into located items. The scanner is a small state
machine that reads the source in chunks and yields one item at a time, so the
consumer pulls items on demand. Every stream ends with exactly one terminal
item: ``EOF`` or ``ERROR``.
"""

import enum
import io
from collections.abc import Generator, Iterator
from typing import BinaryIO

from alf.parser.item import Item, Token

# ###############
# Public Interface
# ###############

DEFAULT_CHUNK_SIZE = 4096


class LexerError(Exception):
    """Latched on the lexer when the source is malformed.

    Attributes:
        line: 0-based line number of the offending byte.
        col: 0-based byte column of the offending byte.
    """

    def __init__(self, message: str, line: int, col: int) -> None:
        super().__init__(f"Line {line}, column {col}: {message}")
        self.line = line
        self.col = col


class Lexer:
    """Item generator for Aurora Lyrics Format (ALF) sources.

    The lexer owns its byte source. Items are produced lazily by iterating
    over :meth:`items`; a consumer that stops before the terminal item should
    call :meth:`close` (or use the lexer as a context manager) to release the
    stream.

    Args:
        source: A binary file-like object providing ``read(size)``.
        chunk_size: Number of bytes requested from the source per read.
    """

    def __init__(self, source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._source = source
        self._chunk_size = chunk_size
        self._buffer = b""
        self._pos = 0
        self._exhausted = False
        self._error: Exception | None = None

        self._line = 0
        self._col = 0
        # Column width of the previous line, restored when backing up over "\n".
        self._last_col = 0
        self._last_is_newline = False
        # Set by leading whitespace, cleared by the end of the line.
        self._indented = False

        self._literal = bytearray()
        self._start: tuple[int, int] | None = None
        self._pending: list[Item] = []

        self._items: Generator[Item, None, None] | None = None
        self._closed = False

    def items(self) -> Iterator[Item]:
        """Return the item stream. Repeated calls return the same iterator."""
        if self._items is None:
            self._items = self._run()
            if self._closed:
                self._items.close()
        return self._items

    def __iter__(self) -> Iterator[Item]:
        return self.items()

    def error(self) -> Exception | None:
        """Return the error behind an ``ERROR`` item, or None if there was none.

        For I/O failures this is the exception raised by the source itself;
        for malformed input it is a :class:`LexerError`.
        """
        return self._error

    def close(self) -> None:
        """Stop producing items. Safe to call more than once."""
        self._closed = True
        if self._items is not None:
            self._items.close()

    def __enter__(self) -> "Lexer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Machine driver
    # ------------------------------------------------------------------

    def _run(self) -> Generator[Item, None, None]:
        """Step through the states, yielding items as each state emits them."""
        handlers = {
            _State.INIT: self._state_init,
            _State.NEWLINE: self._state_newline,
            _State.INDENT: self._state_indent,
            _State.COMMENT: self._state_comment,
            _State.NAME: self._state_name,
            _State.COLON: self._state_colon,
            _State.LIST: self._state_list,
            _State.TEXT: self._state_text,
        }
        state: _State | None = _State.INIT
        while state is not None:
            try:
                state = handlers[state]()
            except _Abort as abort:
                self._error = abort.error
                self._literal.clear()
                self._start = None
                self._emit(Token.ERROR)
                state = None
            yield from self._pending
            self._pending.clear()

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _state_init(self) -> "_State | None":
        """Route on the first byte of a line, or of what follows a token."""
        char = self._peek()
        if char is None:
            self._emit(Token.EOF)
            return None
        if char == _NEWLINE:
            return _State.NEWLINE
        if char == _HASH:
            return _State.COMMENT
        if char in _BLANKS:
            return _State.INDENT
        if char in _LETTERS:
            return _State.NAME
        raise self._malformed(f"Unexpected character {chr(char)!r}")

    def _state_newline(self) -> "_State | None":
        """Emit a line ending.

        The newline is reported as one more byte of the line it terminates;
        the following token starts at column zero of the next line.
        """
        self._mark()
        self._append(self._next())
        self._indented = False
        self._emit(Token.NEWLINE)
        return _State.INIT

    def _state_indent(self) -> "_State | None":
        """Emit leading whitespace and route on the first byte that follows it."""
        self._mark()
        while self._peek() in _BLANKS:
            self._append(self._next())
        self._emit(Token.INDENT)
        self._indented = True

        char = self._peek()
        if char is None or char in (_NEWLINE, _HASH):
            return _State.INIT
        if char == _DASH:
            return _State.LIST
        if char in _LETTERS:
            return _State.NAME
        return _State.TEXT

    def _state_comment(self) -> "_State | None":
        """Emit ``#`` and the rest of the line, excluding the line ending."""
        self._mark()
        while True:
            char = self._next()
            if char is None:
                break
            if char == _NEWLINE:
                self._backup()
                break
            self._append(char)
        self._emit(Token.COMMENT)
        return _State.INIT

    def _state_name(self) -> "_State | None":
        """Emit an attribute name, which must be followed by a colon.

        On an indented line a run of letters without a colon is the start of
        a free text line instead.
        """
        self._mark()
        while self._peek() in _LETTERS:
            self._append(self._next())
        if self._peek() == _COLON:
            self._emit(Token.NAME)
            return _State.COLON
        if self._indented:
            return _State.TEXT
        raise self._malformed(f"Expected ':' after attribute name {self._literal.decode('ascii')!r}")

    def _state_colon(self) -> "_State | None":
        """Emit the colon and, when an inline value follows, its separator."""
        self._mark()
        self._append(self._next())
        self._emit(Token.COLON)
        if self._peek() == _SPACE:
            self._emit_whitespace()
            return _State.TEXT
        return _State.INIT

    def _state_list(self) -> "_State | None":
        """Emit a list marker followed by its separator."""
        self._mark()
        self._append(self._next())
        self._emit(Token.LIST)
        if self._peek() == _SPACE:
            self._emit_whitespace()
        return _State.TEXT

    def _state_text(self) -> "_State | None":
        """Emit literal text up to the end of the line."""
        self._mark()
        while True:
            char = self._next()
            if char is None:
                break
            if char == _NEWLINE:
                self._backup()
                break
            self._append(char)
        self._emit(Token.TEXT)
        return _State.INIT

    def _emit_whitespace(self) -> None:
        self._mark()
        self._append(self._next())
        self._emit(Token.WHITESPACE)

    # ------------------------------------------------------------------
    # Token assembly
    # ------------------------------------------------------------------

    def _mark(self) -> None:
        """Record the start of the current token unless already recorded."""
        if self._start is None:
            self._start = (self._line, self._col)

    def _append(self, char: int | None) -> None:
        if char is not None:
            self._literal.append(char)

    def _emit(self, token: Token) -> None:
        """Queue an item built from the accumulated literal, then reset it."""
        line, col = self._start if self._start is not None else (self._line, self._col)
        literal = self._literal.decode("utf-8", "surrogateescape")
        self._literal.clear()
        self._start = None
        self._pending.append(Item(token, literal, line, col))

    def _malformed(self, message: str) -> "_Abort":
        return _Abort(LexerError(message, self._line, self._col))

    # ------------------------------------------------------------------
    # Byte access
    # ------------------------------------------------------------------

    def _fill(self) -> bool:
        """Make sure an unread byte is buffered. Return False at end of input."""
        if self._pos < len(self._buffer):
            return True
        if self._exhausted:
            return False
        try:
            chunk = self._source.read(self._chunk_size)
        except Exception as exc:
            raise _Abort(exc) from exc
        if not chunk:
            self._exhausted = True
            return False
        # The last consumed byte stays buffered so it can be backed up over.
        self._buffer = self._buffer[-1:] + chunk
        self._pos = len(self._buffer) - len(chunk)
        return True

    def _peek(self) -> int | None:
        """Return the next byte without consuming it, or None at end of input."""
        if not self._fill():
            return None
        return self._buffer[self._pos]

    def _next(self) -> int | None:
        """Consume and return the next byte, or None at end of input."""
        if not self._fill():
            return None
        char = self._buffer[self._pos]
        self._pos += 1
        if char == _NEWLINE:
            self._last_is_newline = True
            self._last_col = self._col
            self._line += 1
            self._col = 0
        else:
            self._last_is_newline = False
            self._col += 1
        return char

    def _backup(self) -> None:
        """Step back over the byte returned by the last :meth:`_next`."""
        self._pos -= 1
        if self._last_is_newline:
            self._line -= 1
            self._col = self._last_col
            self._last_is_newline = False
        else:
            self._col -= 1


def new_lexer(source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> tuple[Lexer, Iterator[Item]]:
    """Create a lexer over *source* and return it together with its item stream."""
    lexer = Lexer(source, chunk_size=chunk_size)
    return lexer, lexer.items()


def tokenize(data: bytes | str) -> list[Item]:
    """Tokenize a complete ALF document held in memory.

    Args:
        data: ALF source; text is encoded as UTF-8 first.

    Returns:
        All items, ending with the terminal ``EOF`` or ``ERROR`` item.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return list(Lexer(io.BytesIO(data)).items())


# ################
# Implementation
# ################

_LETTERS: frozenset[int] = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
_BLANKS: frozenset[int] = frozenset(b" \t")

_NEWLINE = ord("\n")
_SPACE = ord(" ")
_HASH = ord("#")
_COLON = ord(":")
_DASH = ord("-")


class _State(enum.Enum):
    """States of the scanning machine."""

    INIT = enum.auto()
    NEWLINE = enum.auto()
    INDENT = enum.auto()
    COMMENT = enum.auto()
    NAME = enum.auto()
    COLON = enum.auto()
    LIST = enum.auto()
    TEXT = enum.auto()


class _Abort(Exception):
    """Stops the machine and carries the error to latch on the lexer."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error
