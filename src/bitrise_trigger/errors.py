# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for build-option resolution.

Every error carries a stable code so that the CLI and logs can report
failures in a structured way.

Error Codes:
    - TRIGGER_001: Neither workflow nor pipeline selected
    - TRIGGER_002: Both workflow and pipeline selected
    - TRIGGER_003: Listen mode requested together with a pipeline
    - TRIGGER_004: The triggering event deleted its ref
    - TRIGGER_005: The pull request is not mergeable
    - TRIGGER_006: No (or an unreadable) event payload
"""

from __future__ import annotations


class TriggerError(Exception):
    """Base exception for bitrise_trigger errors.

    Attributes:
        message: Human-readable error description.
        code: Error code (e.g., TRIGGER_001), None when not classified.

    Example:
        >>> try:
        ...     raise TriggerError("Something failed", code="TRIGGER_999")
        ... except TriggerError as e:
        ...     print(f"Error {e.code}: {e.message}")
        Error TRIGGER_999: Something failed
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ConfigError(TriggerError):
    """Raised when no build can be requested for the current configuration.

    Fatal: resolution stops and the invoking process fails. Use the
    classmethod constructors so codes stay consistent.
    """

    @classmethod
    def missing_workflow_or_pipeline(cls) -> ConfigError:
        return cls(
            "Either bitrise-workflow or bitrise-pipeline must be provided",
            code="TRIGGER_001",
        )

    @classmethod
    def workflow_and_pipeline(cls) -> ConfigError:
        return cls(
            "Cannot specify both bitrise-workflow and bitrise-pipeline",
            code="TRIGGER_002",
        )

    @classmethod
    def listen_with_pipeline(cls) -> ConfigError:
        return cls(
            "Listen option is not supported with bitrise-pipeline",
            code="TRIGGER_003",
        )

    @classmethod
    def deleted_event(cls) -> ConfigError:
        return cls(
            "This is a 'Deleted' event, no build can be started",
            code="TRIGGER_004",
        )

    @classmethod
    def not_mergeable(cls, pr_number: int) -> ConfigError:
        return cls(
            f"Pull Request #{pr_number} is not mergeable",
            code="TRIGGER_005",
        )

    @classmethod
    def missing_payload(cls, detail: str = "No payload found in the context") -> ConfigError:
        return cls(detail, code="TRIGGER_006")


__all__ = ["ConfigError", "TriggerError"]
