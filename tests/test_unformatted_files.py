# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Tests for unformatted file list parsing."""

import pathlib
import tempfile
import unittest

from ci_report.core import unformatted_files


class TestParseUnformattedFiles(unittest.TestCase):
    def test_strips_and_drops_blank_lines(self):
        self.assertEqual(
            unformatted_files.parse_unformatted_files(" foo.log \n\nbar.txt"),
            ["foo.log", "bar.txt"],
        )

    def test_empty_input(self):
        self.assertEqual(unformatted_files.parse_unformatted_files(""), [])
        self.assertEqual(unformatted_files.parse_unformatted_files("\n  \n\t\n"), [])

    def test_keeps_order_and_duplicates(self):
        self.assertEqual(
            unformatted_files.parse_unformatted_files("b.cpp\na.cpp\nb.cpp\n"),
            ["b.cpp", "a.cpp", "b.cpp"],
        )

    def test_crlf_input(self):
        self.assertEqual(
            unformatted_files.parse_unformatted_files("a.cpp\r\nb.h\r\n"),
            ["a.cpp", "b.h"],
        )

    def test_read_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "unformatted.txt"
            path.write_text("src/a.cpp\n\n  include/b.h\n")
            self.assertEqual(
                unformatted_files.read_unformatted_files(path),
                ["src/a.cpp", "include/b.h"],
            )


if __name__ == "__main__":
    unittest.main()
