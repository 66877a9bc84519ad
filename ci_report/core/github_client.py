# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""GitHub REST API client for publishing CI reports.

This module provides a small Python interface to the GitHub REST API for:
- Looking up the head commit of a pull request
- Creating check runs
- Listing and downloading workflow run artifacts

Requests are never retried; any unexpected status code raises
GitHubClientError.
"""

import http.client
import json
from dataclasses import dataclass
from typing import Any

import requests

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class Artifact:
    """Workflow run artifact."""

    artifact_id: str
    name: str


class GitHubClientError(Exception):
    """Exception raised for failed GitHub API requests."""

    pass


class APIRequester(object):
    """REST API client that injects proper GitHub authentication headers."""

    def __init__(self, github_token: str, api_url: str = GITHUB_API_URL):
        self.api_url = api_url.rstrip("/")
        self._api_headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {github_token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        self._session = requests.session()

    def get(self, endpoint: str, params: Any = None) -> requests.Response:
        return self._session.get(
            f"{self.api_url}{endpoint}", params=params, headers=self._api_headers
        )

    def post(self, endpoint: str, payload: Any = {}) -> requests.Response:
        return self._session.post(
            f"{self.api_url}{endpoint}",
            data=json.dumps(payload),
            headers=self._api_headers,
        )


class GitHubClient(object):
    """Helper to call Github REST APIs for one repository."""

    def __init__(self, requester: APIRequester, repo: str):
        """Initialize the GitHub client.

        Args:
            requester: authenticated requester.
            repo: GitHub repository in owner/repo format.
        """
        self._requester = requester
        self.repo = repo

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.repo}"

    def get_pull_request_head_sha(self, pr_number: int) -> str:
        """Get pull request head commit SHA."""

        response = self._requester.get(endpoint=f"{self._repo_path}/pulls/{pr_number}")
        if response.status_code != http.client.OK:
            raise GitHubClientError(
                f"Failed to get pull request: {response.status_code} - {response.text}"
            )

        return response.json()["head"]["sha"]

    def create_check_run(
        self,
        head_sha: str,
        name: str,
        conclusion: str,
        completed_at: str,
        output: dict[str, Any],
    ) -> dict[str, Any]:
        """Creates a completed check run on the given commit.

        Args:
            head_sha: commit to attach the check run to.
            name: check run name.
            conclusion: check run conclusion, e.g. "success".
            completed_at: ISO 8601 completion timestamp.
            output: check run output (title, summary, text, annotations).

        Returns:
            The created check run object.
        """
        response = self._requester.post(
            endpoint=f"{self._repo_path}/check-runs",
            payload={
                "head_sha": head_sha,
                "name": name,
                "status": "completed",
                "completed_at": completed_at,
                "conclusion": conclusion,
                "output": output,
            },
        )
        if response.status_code != http.client.CREATED:
            raise GitHubClientError(
                f"Failed to create check: {response.status_code} - {response.text}"
            )

        return response.json()

    def list_run_artifacts(
        self, run_id: str, per_page: int = 100, max_pages: int = 10
    ) -> list[Artifact]:
        """Lists the artifacts of a workflow run, oldest first."""

        artifacts = []
        for page in range(1, max_pages + 1):
            response = self._requester.get(
                endpoint=f"{self._repo_path}/actions/runs/{run_id}/artifacts",
                params={"per_page": per_page, "page": page},
            )
            if response.status_code != http.client.OK:
                raise GitHubClientError(
                    f"Failed to list artifacts for run {run_id}: "
                    f"{response.status_code} - {response.text}"
                )

            data = response.json()
            records = data["artifacts"]
            artifacts.extend(
                Artifact(artifact_id=str(rec["id"]), name=rec["name"])
                for rec in records
            )
            if len(records) < per_page or len(artifacts) >= data["total_count"]:
                break

        return artifacts

    def download_artifact(self, artifact_id: str) -> bytes:
        """Downloads the zip archive of an artifact."""

        response = self._requester.get(
            endpoint=f"{self._repo_path}/actions/artifacts/{artifact_id}/zip"
        )
        if response.status_code != http.client.OK:
            raise GitHubClientError(
                f"Failed to download artifact {artifact_id}: "
                f"{response.status_code} - {response.text}"
            )

        return response.content
