# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structured decoder for ALF sources.

Consumes the lexer's item stream with one item of lookahead and fills an
:class:`~alf.model.song.ALF` record by dispatching on attribute names.
Nested blocks (lists and the ``Lyric`` section) are delimited by the indent
width of their lines.
"""

import io
import logging
from typing import BinaryIO

from alf.model.song import ALF, LIST_ATTRIBUTES, SCALAR_ATTRIBUTES, Lyric, field_for_attribute
from alf.parser.item import Item, Token
from alf.parser.lexer import DEFAULT_CHUNK_SIZE, Lexer, LexerError, new_lexer

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DecodeError(Exception):
    """Raised or returned when a document cannot be decoded.

    Attributes:
        line: 0-based line of the item that stopped decoding.
        col: 0-based byte column of that item.
        partial: The record decoded before the failure, when available.
    """

    def __init__(self, message: str, line: int, col: int) -> None:
        super().__init__(message)
        self.line = line
        self.col = col
        self.partial: ALF | None = None


class UnknownAttributeError(DecodeError):
    """A top-level attribute name outside the closed ALF set."""

    def __init__(self, item: Item) -> None:
        super().__init__(f'unknown attribute name "{item.literal}"', item.line, item.col)
        self.name = item.literal


class UnexpectedTokenError(DecodeError):
    """A structurally unexpected item, reported only in strict mode."""


class Decoder:
    """Single-shot decoder turning an ALF byte source into an :class:`ALF` record.

    Args:
        source: A binary file-like object providing ``read(size)``.
        strict: Report missing colons, missing scalar values and inline list
            values as :class:`UnexpectedTokenError` instead of tolerating them.
        chunk_size: Number of bytes the lexer requests per read.
    """

    def __init__(
        self,
        source: BinaryIO,
        *,
        strict: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._lexer, self._items = new_lexer(source, chunk_size=chunk_size)
        self._strict = strict
        self._peeked: Item | None = None
        self._terminal: Item | None = None
        # Indent width of the line the last consumed item belongs to.
        self._indent = 0
        self._decoded = False

    @property
    def lexer(self) -> Lexer:
        """The lexer feeding this decoder."""
        return self._lexer

    def decode(self) -> tuple[ALF, Exception | None]:
        """Drain the item stream and return the record with the first error, if any.

        On failure the record holds everything decoded before the error.
        Lexer failures return the lexer's latched error unchanged.

        Raises:
            RuntimeError: If called more than once.
        """
        if self._decoded:
            raise RuntimeError("Decoder.decode() may only be called once")
        self._decoded = True

        alf = ALF()
        error: Exception | None = None
        try:
            error = self._parse(alf)
        except DecodeError as exc:
            error = exc
        finally:
            self._lexer.close()

        if error is not None:
            logger.debug("Decoding stopped: %s", error)
        return alf, error

    # ------------------------------------------------------------------
    # Attribute dispatch
    # ------------------------------------------------------------------

    def _parse(self, alf: ALF) -> Exception | None:
        """Decode top-level attributes until the terminal item."""
        while True:
            item = self._next_item()
            if item.token is Token.EOF:
                return None
            if item.token is Token.ERROR:
                return self._lexer.error()
            if item.token is not Token.NAME:
                continue

            name = item.literal
            if name in SCALAR_ATTRIBUTES:
                setattr(alf, field_for_attribute(name), self._parse_scalar(item))
            elif name in LIST_ATTRIBUTES:
                setattr(alf, field_for_attribute(name), self._parse_list(item, 0))
            elif name == "Lyric":
                alf.lyric = self._parse_lyric(item)
            else:
                raise UnknownAttributeError(item)

    def _parse_scalar(self, name: Item) -> str:
        """Return the inline value following an attribute name."""
        self._expect_colon(name)
        self._accept(Token.WHITESPACE)
        text = self._accept(Token.TEXT)
        if text is None:
            if self._strict:
                raise self._unexpected(self._peek_item(), f"expected a value for {name.literal!r}")
            return ""
        return text.literal

    def _parse_list(self, name: Item, indent: int) -> list[str]:
        """Collect the ``- item`` lines following a list attribute.

        The list ends at the first line indented less than *indent*, or at
        the first item that is not a list entry; that item is left unconsumed.
        """
        self._expect_colon(name)
        values: list[str] = []
        while True:
            item = self._peek_item()
            if item.is_terminal:
                return values
            if item.token is Token.NEWLINE:
                self._next_item()
                if self._read_indent() < indent:
                    return values
                continue
            if item.token in (Token.COMMENT, Token.INDENT):
                self._next_item()
                continue
            if item.token is not Token.LIST:
                if self._strict and item.token in (Token.WHITESPACE, Token.TEXT):
                    raise self._unexpected(item, f"{name.literal!r} takes a list, not an inline value")
                return values

            self._next_item()
            self._accept(Token.WHITESPACE)
            text = self._accept(Token.TEXT)
            values.append(text.literal if text is not None else "")

    def _parse_lyric(self, name: Item) -> Lyric:
        """Decode the nested ``Lyric`` block.

        The block indent is the indent of its first body line, skipping blank
        and comment lines. A body that is not indented deeper than the
        ``Lyric`` attribute itself holds at most an ``Order`` list.
        """
        parent_indent = self._indent
        self._expect_colon(name)
        lyric = Lyric()

        # Rest of the attribute line.
        while not self._peek_item().is_terminal and self._peek_item().token is not Token.NEWLINE:
            item = self._next_item()
            if self._strict and item.token is Token.TEXT:
                raise self._unexpected(item, f"{name.literal!r} takes a block, not an inline value")

        # Blank and comment lines before the first body line.
        while True:
            item = self._peek_item()
            if item.is_terminal:
                return lyric
            if item.token not in (Token.NEWLINE, Token.COMMENT):
                break
            self._next_item()
            self._read_indent()

        indent = self._indent
        if indent <= parent_indent:
            # An unindented body may only hold the order list.
            if item.token is Token.NAME and item.literal == "Order":
                self._next_item()
                lyric.order = self._parse_list(item, indent)
            return lyric

        while True:
            item = self._peek_item()
            if item.is_terminal:
                return lyric
            self._next_item()

            if item.token is Token.NEWLINE:
                if self._read_indent() < indent:
                    return lyric
                continue
            if item.token is not Token.NAME:
                continue

            if item.literal == "Order":
                lyric.order = self._parse_list(item, indent)
                if self._indent < indent:
                    return lyric
            else:
                logger.debug("Skipping Lyric attribute %r at line %d", item.literal, item.line)

    # ------------------------------------------------------------------
    # Item access helpers
    # ------------------------------------------------------------------

    def _next_item(self) -> Item:
        """Consume and return the next item, draining the lookahead slot first."""
        if self._peeked is not None:
            item, self._peeked = self._peeked, None
        else:
            item = self._pull()
        if item.token is Token.NEWLINE:
            self._indent = 0
        elif item.token is Token.INDENT:
            self._indent = len(item.literal)
        return item

    def _peek_item(self) -> Item:
        """Return the next item without consuming it."""
        if self._peeked is None:
            self._peeked = self._pull()
        return self._peeked

    def _pull(self) -> Item:
        """Read a fresh item from the lexer; terminal items repeat forever."""
        if self._terminal is not None:
            return self._terminal
        item = next(self._items, None)
        if item is None:
            # The stream was closed before reaching its terminal item.
            item = Item(Token.EOF, "", 0, 0)
        if item.is_terminal:
            self._terminal = item
        return item

    def _accept(self, token: Token) -> Item | None:
        """Consume the next item if it is a *token*, else leave it in place."""
        if self._peek_item().token is token:
            return self._next_item()
        return None

    def _read_indent(self) -> int:
        """Consume the indent opening the current line and return its width."""
        self._accept(Token.INDENT)
        return self._indent

    def _expect_colon(self, name: Item) -> None:
        if self._accept(Token.COLON) is None and self._strict:
            raise self._unexpected(self._peek_item(), f"expected ':' after {name.literal!r}")

    def _unexpected(self, item: Item, message: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(message, item.line, item.col)


def new_parser(source: BinaryIO, *, strict: bool = False, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Decoder:
    """Create a :class:`Decoder` over *source*."""
    return Decoder(source, strict=strict, chunk_size=chunk_size)


def decode(data: bytes | str, *, strict: bool = False) -> ALF:
    """Decode a complete ALF document held in memory.

    Args:
        data: ALF source; text is encoded as UTF-8 first.
        strict: See :class:`Decoder`.

    Returns:
        The decoded record.

    Raises:
        DecodeError: If the document is malformed or names an unknown
            attribute. The partially decoded record is attached as ``partial``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    alf, error = Decoder(io.BytesIO(data), strict=strict).decode()
    if error is None:
        return alf
    if isinstance(error, LexerError):
        wrapped = DecodeError(str(error), error.line, error.col)
        wrapped.partial = alf
        raise wrapped from error
    if isinstance(error, DecodeError):
        error.partial = alf
    raise error
