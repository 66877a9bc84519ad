# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Tests for collecting and publishing the CI report."""

import io
import pathlib
import re
import tempfile
import unittest
from unittest import mock

from ci_report.core import artifacts, github_client, publisher, report
from ci_report.core.context import GitHubContext
from ci_report.core.github_client import Artifact, GitHubClientError

PUSH_CONTEXT = GitHubContext(repository="org/repo", event_name="push", sha="merge")
PR_CONTEXT = GitHubContext(
    repository="org/repo",
    event_name="pull_request",
    sha="merge",
    pull_request_number=7,
)


class FakeArtifactStore(artifacts.ArtifactStore):
    """In-memory store, build name to log content."""

    def __init__(self, logs: dict[str, str], root):
        self.logs = logs
        self.root = root

    def list_artifacts(self):
        return [Artifact(artifact_id=name, name=name) for name in self.logs]

    def download_artifact(self, artifact):
        artifact_dir = self.root / artifact.name
        artifact_dir.mkdir(parents=True, exist_ok=True)
        (artifact_dir / f"{artifact.name}.log").write_text(self.logs[artifact.name])
        return artifact_dir


class TestCollectReport(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.root = pathlib.Path(self._tmpdir.name)

    def test_no_build_logs(self):
        store = FakeArtifactStore({}, self.root)
        with self.assertRaises(publisher.NoBuildLogsError) as cm:
            publisher.collect_report(store, [])
        self.assertEqual(str(cm.exception), "No build logs found")

    def test_collects_warnings_from_all_builds(self):
        store = FakeArtifactStore(
            {
                "linux": "../a.cpp:1:2: warning: w\n",
                "macos": "clean\n",
                "windows": "../b.cpp:3:4: warning: v\n../c.cpp:5:6: warning: u\n",
            },
            self.root,
        )

        result = publisher.collect_report(store, ["d.cpp"])

        self.assertEqual(result.num_builds, 3)
        self.assertEqual(result.total_warning_count, 3)
        self.assertEqual(
            result.summary_sections[0], "Warnings were generated for 2 of 3 build(s)."
        )
        self.assertEqual(result.conclusion, report.Conclusion.FAILURE)

    def test_artifact_pattern(self):
        store = FakeArtifactStore(
            {"build-linux": "clean", "docs": "../a.cpp:1:2: warning: w"}, self.root
        )

        result = publisher.collect_report(store, [], artifact_pattern="build-*")

        self.assertEqual(result.num_builds, 1)
        self.assertEqual(result.conclusion, report.Conclusion.SUCCESS)

    def test_warns_about_unannotated_warnings(self):
        log = "".join(f"../a.cpp:{i}:1: warning: w\n" for i in range(1, 4))
        store = FakeArtifactStore({"linux": log}, self.root)

        with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
            publisher.collect_report(store, [f"f{i}.cpp" for i in range(49)])

        self.assertIn("Only 1 of 3 warnings are annotated", stderr.getvalue())


class TestPublishReport(unittest.TestCase):
    def setUp(self):
        self.client = mock.create_autospec(github_client.GitHubClient, instance=True)
        self.client.create_check_run.return_value = {"id": 1}
        self.report = report.aggregate_report(
            {}, num_builds=1, unformatted_files=["a.cpp"]
        )

    def test_check_run_name(self):
        self.assertEqual(publisher.check_run_name(PUSH_CONTEXT), "ci-report-push")
        self.assertEqual(publisher.check_run_name(PR_CONTEXT), "ci-report-pr")
        self.assertEqual(publisher.check_run_name(PR_CONTEXT, "lint"), "lint-pr")

    def test_push_uses_event_sha(self):
        self.assertEqual(publisher.resolve_head_sha(PUSH_CONTEXT, self.client), "merge")
        self.client.get_pull_request_head_sha.assert_not_called()

    def test_pull_request_uses_head_sha(self):
        self.client.get_pull_request_head_sha.return_value = "head"
        self.assertEqual(publisher.resolve_head_sha(PR_CONTEXT, self.client), "head")
        self.client.get_pull_request_head_sha.assert_called_once_with(7)

    def test_pull_request_without_number(self):
        context = GitHubContext(
            repository="org/repo", event_name="pull_request_target", sha="merge"
        )
        with self.assertRaises(ValueError):
            publisher.resolve_head_sha(context, self.client)

    def test_publish_report(self):
        self.client.get_pull_request_head_sha.return_value = "head"

        check_run = publisher.publish_report(
            self.report,
            PR_CONTEXT,
            self.client,
            title="My Report",
            completed_at="2025-01-02T03:04:05Z",
        )

        self.assertEqual(check_run, {"id": 1})
        self.client.create_check_run.assert_called_once_with(
            head_sha="head",
            name="ci-report-pr",
            conclusion="failure",
            completed_at="2025-01-02T03:04:05Z",
            output={
                "title": "My Report",
                "summary": self.report.summary,
                "text": self.report.text,
                "annotations": [a.to_json() for a in self.report.annotations],
            },
        )

    def test_publish_report_default_timestamp(self):
        publisher.publish_report(self.report, PUSH_CONTEXT, self.client)

        completed_at = self.client.create_check_run.call_args.kwargs["completed_at"]
        self.assertRegex(completed_at, re.compile(r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ$"))

    def test_pull_request_lookup_failure(self):
        self.client.get_pull_request_head_sha.side_effect = GitHubClientError(
            "Failed to get pull request: 404 - Not Found"
        )

        with self.assertRaises(GitHubClientError):
            publisher.publish_report(self.report, PR_CONTEXT, self.client)
        self.client.create_check_run.assert_not_called()


if __name__ == "__main__":
    unittest.main()
