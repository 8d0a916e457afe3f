# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the ALF structured decoder."""

import io
import logging
from pathlib import Path

import pytest

from alf.model.song import ALF, Lyric
from alf.parser.decoder import (
    DecodeError,
    Decoder,
    UnexpectedTokenError,
    UnknownAttributeError,
    decode,
    new_parser,
)
from alf.parser.lexer import LexerError

OVERVIEW = Path(__file__).parent.parent / "testdata" / "overview.alf"

# ###############
# Test Helpers
# ###############


class _FailingSource:
    def read(self, size: int = -1) -> bytes:
        raise OSError("boom")


def _decode(source: str, strict: bool = False) -> tuple[ALF, Exception | None]:
    """Decode a source string, returning the record and the latched error."""
    return Decoder(io.BytesIO(source.encode("utf-8")), strict=strict).decode()


def _ok(source: str, strict: bool = False) -> ALF:
    alf, error = _decode(source, strict=strict)
    assert error is None
    return alf


# ###############
# Empty Input
# ###############


class TestEmptyInput:
    def test_empty_source_returns_empty_record(self) -> None:
        alf = _ok("")
        assert alf == ALF()
        assert alf.title is None
        assert alf.names == []
        assert alf.notes == []
        assert alf.lyric.order == []

    def test_comments_and_blank_lines_only(self) -> None:
        assert _ok("# one\n\n  # two\n") == ALF()


# ###############
# Scalars
# ###############


class TestScalars:
    def test_title_and_artist(self) -> None:
        alf = _ok("Title: The title.\nArtist: Gopher.")
        assert alf.title == "The title."
        assert alf.artist == "Gopher."
        assert alf.author is None
        assert alf.album is None

    def test_all_scalars(self) -> None:
        alf = _ok("Title: T\nAuthor: Au\nArtist: Ar\nAlbum: Al\n")
        assert (alf.title, alf.author, alf.artist, alf.album) == ("T", "Au", "Ar", "Al")

    def test_value_keeps_inner_punctuation(self) -> None:
        assert _ok("Title: Time: 3:14 # not a comment").title == "Time: 3:14 # not a comment"

    def test_later_value_wins(self) -> None:
        assert _ok("Title: first\nTitle: second").title == "second"

    def test_missing_value_is_empty_string(self) -> None:
        alf = _ok("Title:\nAlbum: A")
        assert alf.title == ""
        assert alf.album == "A"

    def test_comments_between_attributes_are_ignored(self) -> None:
        alf = _ok("# header\nTitle: T\n# middle\nAlbum: A\n")
        assert alf.title == "T"
        assert alf.album == "A"


# ###############
# Lists
# ###############


class TestLists:
    def test_notes(self) -> None:
        assert _ok("Notes:\n\t- One Note.\n\t- Other Note.").notes == ["One Note.", "Other Note."]

    def test_names(self) -> None:
        assert _ok("Names:\n  - A\n  - B\n").names == ["A", "B"]

    def test_attribute_after_list_is_decoded(self) -> None:
        alf = _ok("Names:\n\t- A\n\t- B\nTitle: T\nNotes:\n\t- N\nAlbum: X")
        assert alf.names == ["A", "B"]
        assert alf.title == "T"
        assert alf.notes == ["N"]
        assert alf.album == "X"

    def test_comment_inside_list_is_skipped(self) -> None:
        assert _ok("Notes:\n\t- a\n\t# aside\n\t- b").notes == ["a", "b"]

    def test_free_text_line_ends_list(self) -> None:
        assert _ok("Notes:\n\t- a\n\tplain text\n\t- b").notes == ["a"]

    def test_order_is_preserved(self) -> None:
        items = [f"item {i}" for i in range(10)]
        source = "Notes:\n" + "".join(f"\t- {value}\n" for value in items)
        assert _ok(source).notes == items

    def test_empty_list(self) -> None:
        alf = _ok("Notes:\nTitle: T")
        assert alf.notes == []
        assert alf.title == "T"

    def test_empty_list_item(self) -> None:
        assert _ok("Notes:\n\t-\n\t- b").notes == ["", "b"]

    def test_inline_value_on_list_is_tolerated(self) -> None:
        alf = _ok("Names: oops\nTitle: T")
        assert alf.names == []
        assert alf.title == "T"


# ###############
# Lyric Block
# ###############


class TestLyric:
    def test_order(self) -> None:
        alf = _ok("Lyric:\n\tOrder:\n\t\t- Verse\n\t\t- Chorus\n\t\t- Verse")
        assert alf.lyric == Lyric(order=["Verse", "Chorus", "Verse"])

    def test_block_ends_at_dedent(self) -> None:
        alf = _ok("Lyric:\n\tOrder:\n\t\t- Verse\nTitle: After")
        assert alf.lyric.order == ["Verse"]
        assert alf.title == "After"

    def test_other_nested_names_are_skipped(self) -> None:
        source = "Lyric:\n\tVerse:\n\t\tSome words\n\tOrder:\n\t\t- Verse\n\tChorus:\n\t\tMore words\nAlbum: A"
        alf = _ok(source)
        assert alf.lyric.order == ["Verse"]
        assert alf.album == "A"

    def test_skipped_names_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="alf.parser.decoder"):
            _ok("Lyric:\n\tVerse:\n\t\twords")
        assert "Verse" in caplog.text

    def test_order_list_ends_at_sibling(self) -> None:
        alf = _ok("Lyric:\n  Order:\n    - A\n  Chorus:\n    - not order")
        assert alf.lyric.order == ["A"]

    def test_unindented_body_is_empty(self) -> None:
        alf = _ok("Lyric:\nTitle: T")
        assert alf.lyric.order == []
        assert alf.title == "T"

    @pytest.mark.parametrize(
        "source",
        [
            "Lyric:\nOrder:\n\t- Verse",
            "Lyric:\n\n\tOrder:\n\t\t- Verse",
            "Lyric:\n# sections\n\tOrder:\n\t\t- Verse",
            "Lyric:\n\n  # sections\n\n\tOrder:\n\t\t- Verse\n",
        ],
    )
    def test_first_body_line_after_blanks_and_comments(self, source: str) -> None:
        assert _ok(source).lyric.order == ["Verse"]

    def test_unindented_order_then_top_level_attribute(self) -> None:
        alf = _ok("Lyric:\nOrder:\n\t- Verse\nTitle: T")
        assert alf.lyric.order == ["Verse"]
        assert alf.title == "T"

    def test_lyric_at_end_of_input(self) -> None:
        assert _ok("Lyric:").lyric == Lyric()

    def test_block_indent_uses_first_body_line(self) -> None:
        alf = _ok("Lyric:\n    Order:\n        - A\n  Title: T\n")
        assert alf.lyric.order == ["A"]
        assert alf.title == "T"


# ###############
# Errors
# ###############


class TestErrors:
    def test_unknown_attribute_stops_decoding(self) -> None:
        alf, error = _decode("Title: T\nColor: blue\nAlbum: A")
        assert isinstance(error, UnknownAttributeError)
        assert str(error) == 'unknown attribute name "Color"'
        assert error.name == "Color"
        assert (error.line, error.col) == (1, 0)
        assert alf.title == "T"
        assert alf.album is None

    def test_lexer_error_is_returned_unchanged(self) -> None:
        decoder = Decoder(_FailingSource())
        alf, error = decoder.decode()
        assert alf == ALF()
        assert isinstance(error, OSError)
        assert str(error) == "boom"
        assert decoder.lexer.error() is error

    def test_malformed_source_keeps_partial_record(self) -> None:
        alf, error = _decode("Title: T\n!")
        assert isinstance(error, LexerError)
        assert alf.title == "T"

    def test_malformed_source_inside_list(self) -> None:
        alf, error = _decode("Notes:\n\t- a\n!")
        assert isinstance(error, LexerError)
        assert alf.notes == ["a"]

    def test_decode_is_single_shot(self) -> None:
        decoder = new_parser(io.BytesIO(b"Title: T"))
        decoder.decode()
        with pytest.raises(RuntimeError):
            decoder.decode()


class TestStrict:
    def test_well_formed_source_passes(self) -> None:
        alf = _ok(OVERVIEW.read_text(encoding="utf-8"), strict=True)
        assert alf.title == "Gopher Song"

    def test_scalar_without_value(self) -> None:
        alf, error = _decode("Title:\nAlbum: A", strict=True)
        assert isinstance(error, UnexpectedTokenError)
        assert (error.line, error.col) == (0, 6)
        assert alf.album is None

    def test_inline_value_on_list(self) -> None:
        _, error = _decode("Names: oops", strict=True)
        assert isinstance(error, UnexpectedTokenError)

    def test_inline_value_on_lyric(self) -> None:
        _, error = _decode("Lyric: oops", strict=True)
        assert isinstance(error, UnexpectedTokenError)


# ###############
# decode()
# ###############


class TestDecodeFunction:
    def test_returns_record(self) -> None:
        assert decode("Title: T").title == "T"

    def test_accepts_bytes(self) -> None:
        assert decode(b"Album: A").album == "A"

    def test_raises_with_partial_record(self) -> None:
        with pytest.raises(UnknownAttributeError) as exc_info:
            decode("Title: T\nBogus: x")
        assert exc_info.value.partial is not None
        assert exc_info.value.partial.title == "T"

    def test_lexer_errors_are_wrapped(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode("Title: T\n%")
        assert isinstance(exc_info.value.__cause__, LexerError)
        assert (exc_info.value.line, exc_info.value.col) == (1, 0)
        assert exc_info.value.partial is not None


# ###############
# End to End
# ###############


def test_overview_file() -> None:
    with OVERVIEW.open("rb") as source:
        alf, error = Decoder(source, chunk_size=5).decode()
    assert error is None
    assert alf.title == "Gopher Song"
    assert alf.author == "Jane Doe"
    assert alf.names == ["The Gopher Song", "Song of the Gopher"]
    assert alf.artist == "The Gophers"
    assert alf.album == "Concurrency"
    assert alf.notes == ["Sing softly.", "Clap on the chorus."]
    assert alf.lyric.order == ["Verse", "Chorus", "Verse"]
