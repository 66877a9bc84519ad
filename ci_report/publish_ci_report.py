# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Publishes build warnings and formatting violations as a GitHub check run.

Downloads the build log artifacts of the current workflow run, extracts
compiler warnings, combines them with the list of unformatted files and
creates a check run with annotations. The step fails if files are not
formatted, since a failed check run alone does not fail the workflow.

Requires (unless --dry-run is used):
- GITHUB_TOKEN or the `gh-token` action input: token with `checks: write`
  and `actions: read` permissions.
- GITHUB_REPOSITORY, GITHUB_EVENT_NAME, GITHUB_SHA: set by GitHub Actions.
- GITHUB_RUN_ID: set by GitHub Actions, used unless --artifacts-dir is given.
- GITHUB_EVENT_PATH: set by GitHub Actions, used for pull request events.

Usage:
    ci-report --unformatted-files "$UNFORMATTED"
    ci-report --artifacts-dir build-logs/ --unformatted-files-file unformatted.txt
    ci-report --artifacts-dir build-logs/ --dry-run --json
"""

import argparse
import json
import os
import pathlib
import sys
import tempfile

import markdown_strings as md

from ci_report.common import actions, cli, console, exit_codes
from ci_report.core import artifacts, publisher, report, unformatted_files
from ci_report.core.context import GitHubContext
from ci_report.core.github_client import (
    GITHUB_API_URL,
    APIRequester,
    GitHubClient,
)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publishes build warnings and formatting violations as a "
        "GitHub check run."
    )
    files_group = parser.add_mutually_exclusive_group()
    files_group.add_argument(
        "--unformatted-files",
        default=None,
        help="Newline-separated list of unformatted files "
        "(default: the `unformatted-files` action input)",
    )
    files_group.add_argument(
        "--unformatted-files-file",
        type=pathlib.Path,
        default=None,
        help="File containing the list of unformatted files, one per line",
    )
    parser.add_argument(
        "--github-token",
        default=None,
        help="GitHub token (default: `gh-token` action input, then $GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--repo",
        default=None,
        help="Repository in owner/repo format (default: $GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--api-url",
        default=os.environ.get("GITHUB_API_URL") or GITHUB_API_URL,
        help="GitHub REST API URL (default: $GITHUB_API_URL)",
    )
    parser.add_argument(
        "--artifacts-dir",
        type=pathlib.Path,
        default=None,
        help="Read already downloaded artifacts from this directory, one "
        "sub-directory per build, instead of using the GitHub API",
    )
    parser.add_argument(
        "--artifact-pattern",
        default="*",
        help="Only use artifacts whose names match this glob (default: all)",
    )
    parser.add_argument(
        "--download-dir",
        type=pathlib.Path,
        default=None,
        help="Directory to extract downloaded artifacts to "
        "(default: a temporary directory)",
    )
    parser.add_argument(
        "--format-config",
        default=report.DEFAULT_FORMAT_CONFIG,
        help="Name of the formatter configuration shown in messages",
    )
    parser.add_argument(
        "--check-name-prefix",
        default=publisher.CHECK_NAME_PREFIX,
        help="Check run name prefix; the trigger is appended",
    )
    parser.add_argument(
        "--title", default=publisher.CHECK_TITLE, help="Check run title"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the check run instead of creating it",
    )
    cli.add_common_output_flags(parser)
    return parser.parse_args(argv)


def _get_unformatted_files(args: argparse.Namespace) -> list[str]:
    if args.unformatted_files_file is not None:
        return unformatted_files.read_unformatted_files(args.unformatted_files_file)
    if args.unformatted_files is not None:
        return unformatted_files.parse_unformatted_files(args.unformatted_files)
    return unformatted_files.parse_unformatted_files(
        actions.get_input("unformatted-files")
    )


def _get_github_token(args: argparse.Namespace) -> str | None:
    return (
        args.github_token
        or actions.get_input("gh-token")
        or os.environ.get("GITHUB_TOKEN")
    )


def _get_context(args: argparse.Namespace) -> GitHubContext | None:
    try:
        return GitHubContext.from_environ(repository=args.repo)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise
    except ValueError:
        # A dry run over local artifacts doesn't need the Actions environment.
        if args.dry_run and args.artifacts_dir is not None:
            return None
        raise


def _write_outputs(
    ci_report: report.Report, title: str, check_run_url: str | None, args=None
):
    actions.set_output(
        {
            "conclusion": str(ci_report.conclusion),
            "warning-count": str(ci_report.total_warning_count),
            "unformatted-file-count": str(ci_report.unformatted_file_count),
        },
        args=args,
    )
    summary = [md.header(title, 2), ci_report.summary]
    summary.extend(ci_report.text_sections)
    if check_run_url:
        summary.append(md.link("Check run", check_run_url))
    actions.write_job_summary("\n\n".join(summary))


def _report_to_json(ci_report: report.Report) -> dict:
    return {
        "conclusion": str(ci_report.conclusion),
        "num_builds": ci_report.num_builds,
        "total_warning_count": ci_report.total_warning_count,
        "unformatted_file_count": ci_report.unformatted_file_count,
        "summary": ci_report.summary,
        "text": ci_report.text,
        "annotations": [a.to_json() for a in ci_report.annotations],
    }


def run(args: argparse.Namespace) -> int:
    """Collects and publishes the report.

    Returns:
        Exit code
    """
    files = _get_unformatted_files(args)
    context = _get_context(args)

    client = None
    github_token = _get_github_token(args)
    if github_token:
        client = GitHubClient(
            APIRequester(github_token=github_token, api_url=args.api_url),
            repo=context.repository if context else args.repo,
        )
    elif not args.dry_run:
        raise ValueError("GITHUB_TOKEN must be set.")

    with tempfile.TemporaryDirectory() as tmpdir:
        if args.artifacts_dir is not None:
            store = artifacts.LocalArtifactStore(args.artifacts_dir)
        else:
            if client is None:
                raise ValueError("GITHUB_TOKEN must be set to download artifacts.")
            if context.run_id is None:
                raise ValueError("GITHUB_RUN_ID must be set.")
            store = artifacts.GitHubArtifactStore(
                client,
                run_id=context.run_id,
                download_dir=args.download_dir or pathlib.Path(tmpdir),
                args=args,
            )

        ci_report = publisher.collect_report(
            store,
            files,
            format_config=args.format_config,
            artifact_pattern=args.artifact_pattern,
            args=args,
        )

    console.note(
        f"Conclusion: {console.conclusion(str(ci_report.conclusion), args=args)}",
        args=args,
    )
    console.note(ci_report.summary, args=args)

    if args.dry_run:
        payload = {
            "conclusion": str(ci_report.conclusion),
            "output": publisher.build_check_run_output(ci_report, args.title),
        }
        if context is not None:
            payload["name"] = publisher.check_run_name(context, args.check_name_prefix)
        console.print_json(payload, args=args)
    else:
        check_run = publisher.publish_report(
            ci_report,
            context,
            client,
            check_name_prefix=args.check_name_prefix,
            title=args.title,
            args=args,
        )
        check_run_url = check_run.get("html_url")
        console.success(f"Created check run {check_run_url or ''}".rstrip(), args=args)
        _write_outputs(ci_report, args.title, check_run_url, args=args)
        if args.json:
            console.print_json(_report_to_json(ci_report), args=args)

    # Creating a failed check doesn't fail the workflow run,
    # so we additionally have to fail this step.
    if ci_report.failure_message is not None:
        actions.set_failed(ci_report.failure_message, args=args)
        return exit_codes.ERROR
    return exit_codes.SUCCESS


def main(args: argparse.Namespace) -> int:
    """Main entry point for ci-report.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    # Auto-enable quiet mode for JSON output to keep stdout clean.
    if args.json:
        args.quiet = True

    try:
        return run(args)
    except publisher.NoBuildLogsError as e:
        actions.set_failed(str(e), args=args)
        return exit_codes.NOT_FOUND
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        # Malformed data rather than a configuration problem.
        actions.set_failed(str(e), args=args)
        return exit_codes.ERROR
    except ValueError as e:
        actions.set_failed(str(e) or "Invalid configuration", args=args)
        return exit_codes.SETUP_ERROR
    except Exception as e:
        actions.set_failed(str(e) or "Unknown error", args=args)
        return exit_codes.ERROR


def entry_point():
    sys.exit(main(parse_arguments()))


if __name__ == "__main__":
    entry_point()
