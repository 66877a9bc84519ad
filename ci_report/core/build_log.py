# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

r"""Compiler warning extraction from build logs.

Recognizes single-line GCC/Clang warnings of the form:

    ../src/a.cpp:12:4: warning: unused variable 'x' [-Wunused-variable]

Multi-line diagnostics (notes, caret lines, template backtraces) are not
followed. Everything that is not a warning line is skipped silently since
most of a build log is regular build output.

Builds run in a directory one level below the repository root, so compiler
paths carry a "../" prefix that is removed to make them repository-relative.

Example usage:
    from ci_report.core import build_log

    warnings = build_log.parse_build_log(log_file.read_text())
    for w in warnings:
        print(f"{w.path}:{w.line}:{w.column}:{w.message}")
"""

import re
from dataclasses import dataclass
from typing import Iterable

# Builds are assumed to run one directory below the repository root.
BUILD_DIR_PREFIX = "../"

_WARNING_MARKER = ": warning:"

# Example: "../src/a.cpp:12:4: warning: unused variable 'x'"
_WARNING_RE = re.compile(
    r"^(?P<path>.*):(?P<line>[1-9]\d*):(?P<column>[1-9]\d*): warning:(?P<message>.+)$"
)


@dataclass(frozen=True)
class BuildWarning:
    """One compiler warning occurrence.

    Attributes:
        path: Repository-relative source path.
        line: 1-based line number.
        column: 1-based column number.
        message: Text after "warning:", kept verbatim.
    """

    path: str
    line: int
    column: int
    message: str


def parse_warning_line(
    line: str, path_prefix: str = BUILD_DIR_PREFIX
) -> BuildWarning | None:
    """Parses one log line.

    Args:
        line: A single log line without the trailing newline.
        path_prefix: Build directory prefix to strip from the path.

    Returns:
        The warning, or None if the line is not a warning about a file inside
        the repository.
    """
    # Fast substring check before running the regex.
    if _WARNING_MARKER not in line:
        return None
    match = _WARNING_RE.match(line)
    if match is None:
        return None

    path = match.group("path")
    if path_prefix and path.startswith(path_prefix):
        path = path[len(path_prefix) :]
    # Files outside of the checkout can't be annotated.
    if not path or path.startswith("../"):
        return None

    return BuildWarning(
        path=path,
        line=int(match.group("line")),
        column=int(match.group("column")),
        message=match.group("message"),
    )


def parse_build_log(
    log_content: str, path_prefix: str = BUILD_DIR_PREFIX
) -> list[BuildWarning]:
    """Returns all warnings of a build log in order of appearance."""
    warnings = []
    for line in log_content.splitlines():
        warning = parse_warning_line(line, path_prefix)
        if warning is not None:
            warnings.append(warning)
    return warnings


class CompilerWarningExtractor:
    """Extracts warnings with a fixed build directory prefix."""

    name = "compiler_warning"

    def __init__(self, path_prefix: str = BUILD_DIR_PREFIX) -> None:
        self.path_prefix = path_prefix

    def extract(self, log_content: str) -> list[BuildWarning]:
        return parse_build_log(log_content, self.path_prefix)


def collect_build_warnings(
    build_logs: Iterable[tuple[str, str]],
    extractor: CompilerWarningExtractor | None = None,
) -> dict[str, list[BuildWarning]]:
    """Maps build names to their warnings.

    Builds without warnings get no entry. The mapping keeps the order of
    `build_logs`.

    Args:
        build_logs: (build name, log content) pairs.
        extractor: Extractor to use, defaults to CompilerWarningExtractor().

    Returns:
        Insertion-ordered dict of build name to warnings.

    Raises:
        ValueError: If a build name appears more than once.
    """
    if extractor is None:
        extractor = CompilerWarningExtractor()

    seen_builds = set()
    build_warnings = {}
    for build_name, log_content in build_logs:
        if build_name in seen_builds:
            raise ValueError(f"Duplicate build log for build '{build_name}'")
        seen_builds.add(build_name)

        warnings = extractor.extract(log_content)
        if warnings:
            build_warnings[build_name] = warnings
    return build_warnings
