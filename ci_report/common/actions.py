# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""GitHub Actions workflow integration.

Reads action inputs and writes step outputs, job summaries and workflow
commands. See
https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""

import os
import sys
from typing import Mapping

from ci_report.common import console


def get_input(name: str, environ: Mapping[str, str] = os.environ) -> str:
    """Returns the value of an action input, or "" when it is not set.

    The runner exposes `with:` inputs as `INPUT_<NAME>` environment variables,
    upper-cased with spaces replaced by underscores. Dashes are kept.
    """
    key = "INPUT_" + name.replace(" ", "_").upper()
    return environ.get(key, "").strip()


def set_output(
    d: Mapping[str, str], environ: Mapping[str, str] = os.environ, *, args=None
):
    """Appends step outputs to $GITHUB_OUTPUT. No-op outside of Actions."""
    step_output_file = environ.get("GITHUB_OUTPUT")
    if not step_output_file:
        return
    console.note(f"Setting outputs: {dict(d)}", args=args)
    with open(step_output_file, "a") as f:
        f.writelines(f"{k}={v}" + "\n" for k, v in d.items())


def write_job_summary(summary: str, environ: Mapping[str, str] = os.environ):
    """Write markdown messages on Github workflow UI.
    See https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions#adding-a-job-summary
    """
    step_summary_file = environ.get("GITHUB_STEP_SUMMARY")
    if not step_summary_file:
        return
    with open(step_summary_file, "a", encoding="utf-8") as f:
        # Use double newlines to split sections in markdown.
        f.write(summary + "\n\n")


def _escape_command_data(data: str) -> str:
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str, *, args=None):
    """Marks the step as failed with an error annotation.

    The caller is still responsible for exiting with a non-zero code. With
    `--json` the workflow command goes to stderr so stdout stays valid JSON;
    the runner picks up commands from both streams.
    """
    console.error(message, args=args)
    stream = sys.stderr if getattr(args, "json", False) else sys.stdout
    print(f"::error::{_escape_command_data(message)}", file=stream, flush=True)
