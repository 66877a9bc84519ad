# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Console logging helpers for ci-report.

These helpers centralize printing, target stream selection, and styling. They
pull `pretty`/`quiet` flags from an `args` object when present to keep callers
simple and consistent.

All output goes to stderr except for primary data (like the check run payload
in dry-run mode), which goes to stdout. GitHub Actions shows both streams in
the job log.

Quiet mode behavior:
- error() - ALWAYS prints (errors are never suppressed)
- warn() - Suppressed when quiet=True
- note() - Suppressed when quiet=True
- success() - Suppressed when quiet=True
- print_json() - Outputs compact JSON when quiet=True

Example:
    >>> import argparse
    >>> from ci_report.common import console
    >>>
    >>> args = argparse.Namespace(pretty=True, quiet=False)
    >>> console.note("Downloading artifact 12 'linux-clang'", args=args)
    note: Downloading artifact 12 'linux-clang'
    >>>
    >>> args.quiet = True
    >>> console.error("No build logs found", args=args)
    error: No build logs found  # (errors ALWAYS print, even when quiet)
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any

from ci_report.common import formatting


def _is_pretty(args: Any | None, pretty: bool | None) -> bool:
    """Determine if color output should be used.

    Checks pretty flag, TTY status, and NO_COLOR environment variable.

    Args:
        args: Parsed arguments with pretty flag (optional)
        pretty: Override pretty mode (optional)

    Returns:
        Whether to use color codes in output
    """
    if pretty is not None:
        pretty_flag = bool(pretty)
    else:
        pretty_flag = bool(getattr(args, "pretty", False))

    # We check stderr because that's where console output (note/warn/error) goes.
    return bool(
        pretty_flag and sys.stderr.isatty() and os.environ.get("NO_COLOR") is None
    )


def error(msg: str, *, args: Any | None = None, pretty: bool | None = None) -> None:
    """Print error message to stderr (never suppressed, even in quiet mode)."""
    sys.stderr.write(formatting.error(msg, pretty=_is_pretty(args, pretty)) + "\n")


def warn(msg: str, *, args: Any | None = None, pretty: bool | None = None) -> None:
    """Print warning message to stderr (suppressed in quiet mode)."""
    if getattr(args, "quiet", False):
        return
    sys.stderr.write(formatting.warn(msg, pretty=_is_pretty(args, pretty)) + "\n")


def note(msg: str, *, args: Any | None = None, pretty: bool | None = None) -> None:
    """Print informational note to stderr (suppressed in quiet mode)."""
    if getattr(args, "quiet", False):
        return
    sys.stderr.write(formatting.note(msg, pretty=_is_pretty(args, pretty)) + "\n")


def success(msg: str, *, args: Any | None = None, pretty: bool | None = None) -> None:
    """Print success message to stderr (suppressed in quiet mode)."""
    if getattr(args, "quiet", False):
        return
    sys.stderr.write(formatting.success(msg, pretty=_is_pretty(args, pretty)) + "\n")


def conclusion(
    value: str, *, args: Any | None = None, pretty: bool | None = None
) -> str:
    """Returns the conclusion text, colored when pretty output is enabled."""
    return formatting.conclusion(value, pretty=_is_pretty(args, pretty))


def print_json(
    payload: Any, *, args: Any | None = None, quiet: bool | None = None
) -> None:
    """Print JSON to stdout (compact in quiet mode, pretty otherwise).

    Args:
        payload: Data to serialize as JSON
        args: Parsed arguments with quiet flag (optional)
        quiet: Override quiet mode (optional)
    """
    q = bool(getattr(args, "quiet", False)) if quiet is None else bool(quiet)
    if q:
        sys.stdout.write(
            json.dumps(payload, separators=(",", ":"), sort_keys=True) + "\n"
        )
    else:
        sys.stdout.write(
            json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        )
