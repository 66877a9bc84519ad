# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Shared formatting helpers for human-friendly output.

Note: TTY detection and NO_COLOR checks are handled by console.py before
calling these formatting functions. This module is pure string formatting.
"""

from __future__ import annotations


def _c(code: str, text: str, pretty: bool) -> str:
    if pretty:
        return f"\033[{code}m{text}\033[0m"
    return text


def warn(msg: str, pretty: bool = False) -> str:
    """Format warning message with optional color."""
    prefix = _c("1;33", "warning:", pretty)
    return f"{prefix} {msg}"


def error(msg: str, pretty: bool = False) -> str:
    """Format error message with optional color."""
    prefix = _c("1;31", "error:", pretty)
    return f"{prefix} {msg}"


def note(msg: str, pretty: bool = False) -> str:
    """Format note message with optional color."""
    prefix = _c("1;34", "note:", pretty)
    return f"{prefix} {msg}"


def success(msg: str, pretty: bool = False) -> str:
    """Format success message with optional color."""
    prefix = _c("1;32", "ok:", pretty)
    return f"{prefix} {msg}"


def conclusion(value: str, pretty: bool = False) -> str:
    """Colors a check run conclusion by severity.

    Args:
        value: Conclusion string ("success", "action_required", "failure").
        pretty: Enable colorized output

    Returns:
        Conclusion text, green/yellow/red when pretty
    """
    code = {"success": "1;32", "action_required": "1;33"}.get(value, "1;31")
    return _c(code, value, pretty)
