# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Access to the build log artifacts of a workflow run.

Each build uploads one artifact named after the build that contains a single
`<artifact name>.log` file. Two stores are supported:

- GitHubArtifactStore downloads the artifacts of a workflow run through the
  REST API and extracts them into a local directory.
- LocalArtifactStore reads artifacts that were already downloaded, e.g. by
  actions/download-artifact, one sub-directory per artifact.
"""

import fnmatch
import io
import pathlib
import zipfile
from abc import ABC, abstractmethod

from ci_report.common import console
from ci_report.core.github_client import Artifact, GitHubClient


class ArtifactError(Exception):
    """Exception raised for missing or malformed artifacts."""

    pass


class ArtifactStore(ABC):
    """Lists and downloads build artifacts."""

    @abstractmethod
    def list_artifacts(self) -> list[Artifact]:
        pass

    @abstractmethod
    def download_artifact(self, artifact: Artifact) -> pathlib.Path:
        """Makes the artifact available locally.

        Returns:
            Directory holding the artifact's files.
        """
        pass


class GitHubArtifactStore(ArtifactStore):
    """Artifacts of a workflow run, fetched through the GitHub API."""

    def __init__(
        self,
        client: GitHubClient,
        run_id: str,
        download_dir: pathlib.Path,
        *,
        args=None,
    ) -> None:
        self.client = client
        self.run_id = run_id
        self.download_dir = download_dir
        self.args = args

    def list_artifacts(self) -> list[Artifact]:
        return self.client.list_run_artifacts(self.run_id)

    def download_artifact(self, artifact: Artifact) -> pathlib.Path:
        console.note(
            f'Downloading artifact {artifact.artifact_id} "{artifact.name}"',
            args=self.args,
        )
        contents = self.client.download_artifact(artifact.artifact_id)
        output_dir = self.download_dir / artifact.name
        output_dir.mkdir(parents=True, exist_ok=True)
        try:
            with zipfile.ZipFile(io.BytesIO(contents)) as zip_ref:
                zip_ref.extractall(output_dir)
        except zipfile.BadZipFile as e:
            raise ArtifactError(
                f"Artifact {artifact.artifact_id} '{artifact.name}' is not a zip archive"
            ) from e
        return output_dir


class LocalArtifactStore(ArtifactStore):
    """Artifacts already present on disk, one sub-directory each."""

    def __init__(self, root: pathlib.Path) -> None:
        self.root = root

    def list_artifacts(self) -> list[Artifact]:
        if not self.root.is_dir():
            raise ArtifactError(f"Artifact directory not found: {self.root}")
        return [
            Artifact(artifact_id=path.name, name=path.name)
            for path in sorted(self.root.iterdir())
            if path.is_dir()
        ]

    def download_artifact(self, artifact: Artifact) -> pathlib.Path:
        return self.root / artifact.name


def read_build_logs(
    store: ArtifactStore, name_pattern: str = "*", *, args=None
) -> list[tuple[str, str]]:
    """Fetches the build logs of all matching artifacts.

    Args:
        store: artifact store to read from.
        name_pattern: fnmatch pattern that artifact names must match.
        args: parsed arguments controlling console output.

    Returns:
        (build name, log content) pairs in listing order.

    Raises:
        ArtifactError: If an artifact has no `<name>.log` file.
    """
    artifacts = [
        a for a in store.list_artifacts() if fnmatch.fnmatch(a.name, name_pattern)
    ]
    console.note(f"Found {len(artifacts)} build artifact(s)", args=args)

    build_logs = []
    for artifact in artifacts:
        artifact_dir = store.download_artifact(artifact)
        log_file = artifact_dir / f"{artifact.name}.log"
        if not log_file.is_file():
            raise ArtifactError(
                f"Artifact '{artifact.name}' does not contain '{log_file.name}'"
            )
        build_logs.append(
            (artifact.name, log_file.read_text(encoding="utf-8", errors="replace"))
        )
    return build_logs
