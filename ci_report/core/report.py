# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Aggregation of build warnings and formatting violations into a report.

The report maps onto the output of a GitHub check run: summary sentences,
markdown detail text, annotations and a conclusion. GitHub accepts at most
MAX_ANNOTATIONS annotations per request, so warning annotations are cut off
once the budget left over by formatting violations is used up.
"""

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import markdown_strings as md

from ci_report.core.build_log import BuildWarning

# We are limited to 50 annotations in a single API request.
MAX_ANNOTATIONS = 50

DEFAULT_FORMAT_CONFIG = ".clang-format"


# We don't get StrEnum till Python 3.11
@enum.unique
class AnnotationLevel(str, enum.Enum):
    __str__ = str.__str__

    NOTICE = "notice"
    WARNING = "warning"
    FAILURE = "failure"


@enum.unique
class Conclusion(str, enum.Enum):
    __str__ = str.__str__

    SUCCESS = "success"
    # There is no "warning" conclusion for check runs.
    ACTION_REQUIRED = "action_required"
    FAILURE = "failure"


@dataclass(frozen=True)
class Annotation:
    """A check run annotation attached to a file location."""

    path: str
    start_line: int
    end_line: int
    level: AnnotationLevel
    message: str
    start_column: int | None = None
    end_column: int | None = None

    def to_json(self) -> dict[str, Any]:
        data = {
            "path": self.path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "annotation_level": str(self.level),
            "message": self.message,
        }
        if self.start_column is not None:
            data["start_column"] = self.start_column
        if self.end_column is not None:
            data["end_column"] = self.end_column
        return data


@dataclass(frozen=True)
class Report:
    """Aggregated CI report.

    Attributes:
        summary_sections: Summary sentences, joined with spaces.
        text_sections: Markdown detail blocks, joined with blank lines.
        annotations: Annotations, never more than MAX_ANNOTATIONS.
        conclusion: Overall verdict.
        num_builds: Number of builds considered.
        total_warning_count: All warnings, including ones not annotated.
        unformatted_file_count: Number of formatting violations.
        failure_message: Reason to fail the pipeline, if any.
    """

    summary_sections: tuple[str, ...]
    text_sections: tuple[str, ...]
    annotations: tuple[Annotation, ...]
    conclusion: Conclusion
    num_builds: int
    total_warning_count: int
    unformatted_file_count: int
    failure_message: str | None = None

    @property
    def summary(self) -> str:
        return " ".join(self.summary_sections)

    @property
    def text(self) -> str:
        return "\n\n".join(self.text_sections)


def compute_warning_budget(
    unformatted_file_count: int, max_annotations: int = MAX_ANNOTATIONS
) -> int:
    """Returns how many warning annotations fit next to the violations."""
    return max(0, max_annotations - unformatted_file_count)


def _get_conclusion(
    build_warnings: Mapping[str, Sequence[BuildWarning]],
    unformatted_files: Sequence[str],
) -> Conclusion:
    # Formatting violations always dominate warnings.
    if unformatted_files:
        return Conclusion.FAILURE
    if build_warnings:
        return Conclusion.ACTION_REQUIRED
    return Conclusion.SUCCESS


def aggregate_report(
    build_warnings: Mapping[str, Sequence[BuildWarning]],
    num_builds: int,
    unformatted_files: Sequence[str],
    *,
    format_config: str = DEFAULT_FORMAT_CONFIG,
    max_annotations: int = MAX_ANNOTATIONS,
) -> Report:
    """Builds the report for one CI run.

    Args:
      build_warnings: build name to warnings, only builds with warnings.
      num_builds: total number of builds that produced a log.
      unformatted_files: files violating the formatting rules.
      format_config: name of the formatter configuration, used in messages.
      max_annotations: annotation limit of a single check run request.

    Returns:
      The report. Violations are annotated first; warnings only get the
      annotation slots left over.
    """
    summary_sections = []
    text_sections = []

    # Reserve space for unformatted file annotations.
    max_warning_annotations = compute_warning_budget(
        len(unformatted_files), max_annotations
    )

    total_warning_count = 0
    warning_annotations = []
    if build_warnings:
        for build_name, warnings in build_warnings.items():
            total_warning_count += len(warnings)
            for w in warnings:
                if len(warning_annotations) >= max_warning_annotations:
                    break
                warning_annotations.append(
                    Annotation(
                        path=w.path,
                        start_line=w.line,
                        end_line=w.line,
                        start_column=w.column,
                        end_column=w.column,
                        level=AnnotationLevel.WARNING,
                        message=f'Build "{build_name}" generated warning: {w.message}',
                    )
                )

        summary_sections.append(
            f"Warnings were generated for {len(build_warnings)} of {num_builds} build(s)."
        )
        text = "⚠️ Warnings were generated for the following build(s):\n"
        text += md.unordered_list(
            [f"{name}: {len(warnings)}" for name, warnings in build_warnings.items()]
        )
        if total_warning_count >= max_warning_annotations:
            shown = md.bold(str(len(warning_annotations)))
            total = md.bold(str(total_warning_count))
            text += f"\n\nShowing first {shown} warnings out of {total} total."
        text_sections.append(text)
    else:
        summary_sections.append("No warnings were generated.")

    failure_message = None
    violation_annotations = []
    if unformatted_files:
        for f in unformatted_files[:max_annotations]:
            violation_annotations.append(
                Annotation(
                    path=f,
                    start_line=1,
                    end_line=1,
                    level=AnnotationLevel.FAILURE,
                    message=f"File is not formatted according to `{format_config}`.",
                )
            )

        failure_message = (
            f"Some files are not formatted according to `{format_config}`."
        )
        summary_sections.append(failure_message)
        text_sections.append(
            f"❌ The following files are not formatted according to `{format_config}`:\n"
            + md.unordered_list(list(unformatted_files))
        )
    else:
        summary_sections.append(
            f"All files are formatted according to `{format_config}`."
        )

    return Report(
        summary_sections=tuple(summary_sections),
        text_sections=tuple(text_sections),
        annotations=tuple(warning_annotations + violation_annotations),
        conclusion=_get_conclusion(build_warnings, unformatted_files),
        num_builds=num_builds,
        total_warning_count=total_warning_count,
        unformatted_file_count=len(unformatted_files),
        failure_message=failure_message,
    )
