#!/usr/bin/env python3
# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the ALF reader checks locally: format, lint, tests with coverage, and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", [sys.executable, "-m", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", [sys.executable, "-m", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Tests", [sys.executable, "-m", "pytest", "--cov=alf", "--cov-report=term-missing"]),
    ("Build", [sys.executable, "-m", "build", "--wheel"]),
]


def main() -> int:
    """Run every step, then print a colored summary. Returns the exit code."""
    results = [_run_step(name, cmd) for name, cmd in STEPS]

    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        print(color(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(name))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).resolve().parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main())
