# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory record of a decoded ALF document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

SCALAR_ATTRIBUTES: tuple[str, ...] = ("Title", "Author", "Artist", "Album")
LIST_ATTRIBUTES: tuple[str, ...] = ("Names", "Notes")
BLOCK_ATTRIBUTES: tuple[str, ...] = ("Lyric",)
TOP_LEVEL_ATTRIBUTES: frozenset[str] = frozenset(SCALAR_ATTRIBUTES + LIST_ATTRIBUTES + BLOCK_ATTRIBUTES)


class Lyric(BaseModel):
    """The lyric layout of a song.

    Attributes:
        order: Section names in the order they are performed.
    """

    model_config = ConfigDict(populate_by_name=True)

    order: list[str] = _Field(default_factory=list, alias="Order")


class ALF(BaseModel):
    """A song described in the Aurora Lyrics Format.

    Scalar attributes are None when absent from the source; list attributes
    keep the order in which their items appear.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = _Field(default=None, alias="Title")
    author: str | None = _Field(default=None, alias="Author")
    artist: str | None = _Field(default=None, alias="Artist")
    album: str | None = _Field(default=None, alias="Album")
    names: list[str] = _Field(default_factory=list, alias="Names")
    notes: list[str] = _Field(default_factory=list, alias="Notes")
    lyric: Lyric = _Field(default_factory=Lyric, alias="Lyric")


def field_for_attribute(name: str) -> str:
    """Return the model field that stores the ALF attribute *name*.

    Raises:
        KeyError: If *name* is not one of the top-level ALF attributes.
    """
    if name not in TOP_LEVEL_ATTRIBUTES:
        raise KeyError(name)
    return name.lower()
