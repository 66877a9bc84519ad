# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Collects the CI report and publishes it as a GitHub check run."""

import datetime
from typing import Any, Sequence

from ci_report.common import console
from ci_report.core import artifacts, build_log, report
from ci_report.core.context import GitHubContext
from ci_report.core.github_client import GitHubClient

CHECK_NAME_PREFIX = "ci-report"
CHECK_TITLE = "CI Report"


class NoBuildLogsError(Exception):
    """Raised when a run produced no build log artifacts."""

    pass


def collect_report(
    store: artifacts.ArtifactStore,
    unformatted_files: Sequence[str],
    *,
    format_config: str = report.DEFAULT_FORMAT_CONFIG,
    artifact_pattern: str = "*",
    args=None,
) -> report.Report:
    """Downloads the build logs and aggregates them into a report.

    Raises:
        NoBuildLogsError: If no build log artifacts were found.
    """
    build_logs = artifacts.read_build_logs(
        store, name_pattern=artifact_pattern, args=args
    )
    if not build_logs:
        raise NoBuildLogsError("No build logs found")

    build_warnings = build_log.collect_build_warnings(build_logs)
    for build_name, warnings in build_warnings.items():
        console.note(
            f"Build '{build_name}' generated {len(warnings)} warning(s)", args=args
        )

    ci_report = report.aggregate_report(
        build_warnings,
        num_builds=len(build_logs),
        unformatted_files=unformatted_files,
        format_config=format_config,
    )
    annotated = sum(
        1 for a in ci_report.annotations if a.level == report.AnnotationLevel.WARNING
    )
    if annotated < ci_report.total_warning_count:
        console.warn(
            f"Only {annotated} of {ci_report.total_warning_count} warnings "
            "are annotated",
            args=args,
        )
    return ci_report


def check_run_name(context: GitHubContext, prefix: str = CHECK_NAME_PREFIX) -> str:
    # Use different name for the check depending on how this was triggered.
    return f"{prefix}-{context.trigger}"


def resolve_head_sha(context: GitHubContext, client: GitHubClient) -> str:
    """Returns the commit the check run belongs to.

    For pull requests GITHUB_SHA is the merge commit, so the check has to be
    attached to the pull request's head commit instead.
    """
    if not context.is_pull_request:
        return context.sha
    if context.pull_request_number is None:
        raise ValueError("Pull request number is missing from the event payload.")
    return client.get_pull_request_head_sha(context.pull_request_number)


def build_check_run_output(
    ci_report: report.Report, title: str = CHECK_TITLE
) -> dict[str, Any]:
    return {
        "title": title,
        "summary": ci_report.summary,
        "text": ci_report.text,
        "annotations": [a.to_json() for a in ci_report.annotations],
    }


def utc_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%SZ")


def publish_report(
    ci_report: report.Report,
    context: GitHubContext,
    client: GitHubClient,
    *,
    check_name_prefix: str = CHECK_NAME_PREFIX,
    title: str = CHECK_TITLE,
    completed_at: str | None = None,
    args=None,
) -> dict[str, Any]:
    """Creates the check run for the report.

    Returns:
        The created check run object.

    Raises:
        GitHubClientError: If the pull request lookup or check creation fails.
    """
    head_sha = resolve_head_sha(context, client)
    name = check_run_name(context, check_name_prefix)
    console.note(f"Creating check run '{name}' on {head_sha}", args=args)
    return client.create_check_run(
        head_sha=head_sha,
        name=name,
        conclusion=str(ci_report.conclusion),
        completed_at=completed_at or utc_timestamp(),
        output=build_check_run_output(ci_report, title),
    )
