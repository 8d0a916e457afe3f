# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader for the Aurora Lyrics Format (ALF)."""

from alf.model import ALF, Lyric
from alf.parser import DecodeError, Decoder, Lexer, LexerError, decode, new_lexer, new_parser, tokenize

__all__ = [
    "ALF",
    "Lyric",
    "Lexer",
    "LexerError",
    "Decoder",
    "DecodeError",
    "new_lexer",
    "new_parser",
    "tokenize",
    "decode",
]
