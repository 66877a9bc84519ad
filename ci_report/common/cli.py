# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Common CLI helpers.

Provides generic argument parsing helpers shared by the ci-report commands.
"""

from __future__ import annotations

import argparse
import sys


def add_common_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add common output flags to parser.

    Auto-detects terminal color support by default. Pretty mode is enabled when:
    - stderr is a TTY (interactive terminal)
    - NO_COLOR environment variable is not set
    - --no-pretty is not specified

    Args:
        parser: ArgumentParser to add flags to
    """
    parser.add_argument("--json", action="store_true", help="JSON output for scripting")
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=sys.stderr.isatty(),
        help="Human-friendly formatting (default: auto-detect terminal)",
    )
    parser.add_argument(
        "--no-pretty",
        action="store_false",
        dest="pretty",
        help="Disable colored output",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress non-essential text"
    )
