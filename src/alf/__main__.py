# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

from alf.cli.main import main

main()
