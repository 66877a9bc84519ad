# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Parsing of the precomputed list of unformatted files."""

import pathlib


def parse_unformatted_files(text: str) -> list[str]:
    """Splits a newline-separated file list.

    Entries are stripped and blank entries dropped. Order and duplicates are
    kept as given.
    """
    return [f.strip() for f in text.split("\n") if f.strip()]


def read_unformatted_files(path: pathlib.Path) -> list[str]:
    return parse_unformatted_files(path.read_text(encoding="utf-8"))
