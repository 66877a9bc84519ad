# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Trigger context of the running GitHub Actions workflow.

The following environment variables are read:
- GITHUB_REPOSITORY (required): GitHub org and repository, e.g. org/repo.
- GITHUB_EVENT_NAME (required): GitHub event name, e.g. pull_request.
- GITHUB_SHA (required): commit SHA that triggered the workflow.
- GITHUB_RUN_ID (optional): workflow run ID, needed to list artifacts.
- GITHUB_EVENT_PATH (optional): path to the JSON event payload. Required for
    pull request events to find the pull request number.
- GITHUB_SERVER_URL (optional): defaults to https://github.com.
"""

import json
import os
import pathlib
from dataclasses import dataclass
from typing import Mapping

PULL_REQUEST_EVENTS = frozenset(["pull_request", "pull_request_target"])


@dataclass(frozen=True)
class GitHubContext:
    repository: str
    event_name: str
    sha: str
    run_id: str | None = None
    pull_request_number: int | None = None
    server_url: str = "https://github.com"

    @property
    def is_pull_request(self) -> bool:
        return self.event_name in PULL_REQUEST_EVENTS

    @property
    def trigger(self) -> str:
        """Short trigger name, "pr" for all pull request events."""
        return "pr" if self.is_pull_request else self.event_name

    @property
    def run_url(self) -> str | None:
        if self.run_id is None:
            return None
        return f"{self.server_url}/{self.repository}/actions/runs/{self.run_id}"

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] = os.environ, repository: str | None = None
    ) -> "GitHubContext":
        """Reads the context from the Actions environment.

        Args:
            environ: environment variables.
            repository: overrides GITHUB_REPOSITORY.

        Raises:
            ValueError: If a required variable is missing.
        """

        def require(name: str) -> str:
            value = environ.get(name)
            if not value:
                raise ValueError(f"{name} must be set.")
            return value

        repository = repository or require("GITHUB_REPOSITORY")
        if repository.count("/") != 1:
            raise ValueError(
                f"Repository must be in owner/repo format, got '{repository}'."
            )
        event_name = require("GITHUB_EVENT_NAME")

        pull_request_number = None
        if event_name in PULL_REQUEST_EVENTS:
            event_path = require("GITHUB_EVENT_PATH")
            event = json.loads(pathlib.Path(event_path).read_text())
            # Sanitize the pr number to make sure it is an integer.
            pull_request_number = int(event["pull_request"]["number"])

        return cls(
            repository=repository,
            event_name=event_name,
            sha=require("GITHUB_SHA"),
            run_id=environ.get("GITHUB_RUN_ID") or None,
            pull_request_number=pull_request_number,
            server_url=environ.get("GITHUB_SERVER_URL") or "https://github.com",
        )
