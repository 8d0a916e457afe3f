# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the ALF reader configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from alf.parser.lexer import DEFAULT_CHUNK_SIZE

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".alf.yaml"


class ReaderConfigError(Exception):
    """Raised when a reader configuration file is invalid or cannot be loaded."""


@dataclass
class ReaderConfig:
    """Options controlling how ALF sources are read.

    Attributes:
        strict: Report structurally unexpected items instead of tolerating them.
        chunk_size: Number of bytes the lexer requests per read.
    """

    strict: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE


def load_reader_config(path: Path) -> ReaderConfig:
    """Load and parse an ALF reader configuration file.

    Args:
        path: Path to the `.alf.yaml` file.

    Returns:
        A ReaderConfig instance populated from the file.

    Raises:
        ReaderConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ReaderConfigError(f"Reader config file not found: {path}") from None
    except OSError as exc:
        raise ReaderConfigError(f"Cannot read reader config file: {exc}") from exc

    return _parse_reader_config(text, source_label=str(path))


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"strict", "chunk-size"})


def _parse_reader_config(text: str, source_label: str = "<string>") -> ReaderConfig:
    """Parse reader config YAML text into a ReaderConfig.

    An empty document yields the defaults.

    Raises:
        ReaderConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ReaderConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ReaderConfig()
    if not isinstance(data, dict):
        raise ReaderConfigError(f"{source_label}: reader config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ReaderConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = ReaderConfig()
    if "strict" in data:
        strict = data["strict"]
        if not isinstance(strict, bool):
            raise ReaderConfigError(f"{source_label}: 'strict' must be a boolean")
        config.strict = strict
    if "chunk-size" in data:
        chunk_size = data["chunk-size"]
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
            raise ReaderConfigError(f"{source_label}: 'chunk-size' must be a positive integer")
        config.chunk_size = chunk_size
    return config
