# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for ALF."""
