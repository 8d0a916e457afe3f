# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Located tokens shared by the lexer and the decoder."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class Token(enum.Enum):
    """Every part of the Aurora Lyrics Format (ALF) grammar the lexer can emit."""

    ERROR = 0
    EOF = 1
    NEWLINE = 2
    WHITESPACE = 3
    INDENT = 4
    COLON = 5
    COMMENT = 6
    NAME = 7
    LIST = 8
    TEXT = 9


TERMINAL_TOKENS: frozenset[Token] = frozenset({Token.ERROR, Token.EOF})


def token_name(token: Token) -> str:
    """Return the human-readable name of a token kind, e.g. ``"Newline"``."""
    return _TOKEN_NAMES[token]


@dataclass(frozen=True)
class Item:
    """A token with its literal text and its location in the source.

    Attributes:
        token: The kind of token.
        literal: The source text of the token (empty for terminal items).
        line: 0-based line of the first byte of the literal.
        col: 0-based byte column of the first byte of the literal.
    """

    token: Token
    literal: str
    line: int
    col: int

    @property
    def is_terminal(self) -> bool:
        """True for the EOF and Error items that end every stream."""
        return self.token in TERMINAL_TOKENS

    def __str__(self) -> str:
        return f"<Item ({token_name(self.token)})[{self.line}:{self.col}] {self.literal!r}>"


# ################
# Implementation
# ################

_TOKEN_NAMES: dict[Token, str] = {
    Token.ERROR: "Error",
    Token.EOF: "EOF",
    Token.NEWLINE: "Newline",
    Token.WHITESPACE: "Whitespace",
    Token.INDENT: "Indent",
    Token.COLON: "Colon",
    Token.COMMENT: "Comment",
    Token.NAME: "Name",
    Token.LIST: "List",
    Token.TEXT: "Text",
}
