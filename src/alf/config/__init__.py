# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader configuration for ALF."""

from alf.config.loader import CONFIG_FILE_NAME, ReaderConfig, ReaderConfigError, load_reader_config

__all__ = [
    "CONFIG_FILE_NAME",
    "ReaderConfig",
    "ReaderConfigError",
    "load_reader_config",
]
