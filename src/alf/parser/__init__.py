# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and decoder for .alf files."""

from alf.parser.decoder import (
    DecodeError,
    Decoder,
    UnexpectedTokenError,
    UnknownAttributeError,
    decode,
    new_parser,
)
from alf.parser.item import TERMINAL_TOKENS, Item, Token, token_name
from alf.parser.lexer import DEFAULT_CHUNK_SIZE, Lexer, LexerError, new_lexer, tokenize

__all__ = [
    "Token",
    "Item",
    "TERMINAL_TOKENS",
    "token_name",
    "Lexer",
    "LexerError",
    "DEFAULT_CHUNK_SIZE",
    "new_lexer",
    "tokenize",
    "Decoder",
    "DecodeError",
    "UnknownAttributeError",
    "UnexpectedTokenError",
    "new_parser",
    "decode",
]
