# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Tests for reading the workflow trigger context."""

import json
import pathlib
import tempfile
import unittest

from ci_report.core.context import GitHubContext


class TestGitHubContext(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.environ = {
            "GITHUB_REPOSITORY": "org/repo",
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_SHA": "abcd",
            "GITHUB_RUN_ID": "99",
        }

    def _write_event(self, event: dict) -> str:
        path = pathlib.Path(self._tmpdir.name) / "event.json"
        path.write_text(json.dumps(event))
        return str(path)

    def test_push(self):
        context = GitHubContext.from_environ(self.environ)

        self.assertEqual(context.repository, "org/repo")
        self.assertEqual(context.sha, "abcd")
        self.assertEqual(context.run_id, "99")
        self.assertFalse(context.is_pull_request)
        self.assertEqual(context.trigger, "push")
        self.assertIsNone(context.pull_request_number)
        self.assertEqual(
            context.run_url, "https://github.com/org/repo/actions/runs/99"
        )

    def test_pull_request_events(self):
        for event_name in ["pull_request", "pull_request_target"]:
            with self.subTest(event_name=event_name):
                self.environ["GITHUB_EVENT_NAME"] = event_name
                self.environ["GITHUB_EVENT_PATH"] = self._write_event(
                    {"pull_request": {"number": 123}}
                )

                context = GitHubContext.from_environ(self.environ)

                self.assertTrue(context.is_pull_request)
                self.assertEqual(context.trigger, "pr")
                self.assertEqual(context.pull_request_number, 123)

    def test_other_event_keeps_name(self):
        self.environ["GITHUB_EVENT_NAME"] = "workflow_dispatch"
        context = GitHubContext.from_environ(self.environ)
        self.assertEqual(context.trigger, "workflow_dispatch")

    def test_missing_required_variable(self):
        for name in ["GITHUB_REPOSITORY", "GITHUB_EVENT_NAME", "GITHUB_SHA"]:
            with self.subTest(name=name):
                environ = dict(self.environ)
                del environ[name]
                with self.assertRaises(ValueError) as cm:
                    GitHubContext.from_environ(environ)
                self.assertIn(name, str(cm.exception))

    def test_pull_request_without_event_path(self):
        self.environ["GITHUB_EVENT_NAME"] = "pull_request"
        with self.assertRaises(ValueError) as cm:
            GitHubContext.from_environ(self.environ)
        self.assertIn("GITHUB_EVENT_PATH", str(cm.exception))

    def test_repository_override(self):
        del self.environ["GITHUB_REPOSITORY"]
        context = GitHubContext.from_environ(self.environ, repository="other/repo")
        self.assertEqual(context.repository, "other/repo")

    def test_invalid_repository(self):
        with self.assertRaises(ValueError):
            GitHubContext.from_environ(self.environ, repository="no-owner")

    def test_optional_run_id(self):
        del self.environ["GITHUB_RUN_ID"]
        context = GitHubContext.from_environ(self.environ)
        self.assertIsNone(context.run_id)
        self.assertIsNone(context.run_url)


if __name__ == "__main__":
    unittest.main()
