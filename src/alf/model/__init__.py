# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Record model for decoded ALF documents."""

from alf.model.song import (
    ALF,
    BLOCK_ATTRIBUTES,
    LIST_ATTRIBUTES,
    SCALAR_ATTRIBUTES,
    TOP_LEVEL_ATTRIBUTES,
    Lyric,
    field_for_attribute,
)

__all__ = [
    "ALF",
    "Lyric",
    "SCALAR_ATTRIBUTES",
    "LIST_ATTRIBUTES",
    "BLOCK_ATTRIBUTES",
    "TOP_LEVEL_ATTRIBUTES",
    "field_for_attribute",
]
