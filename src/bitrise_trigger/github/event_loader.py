# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Build the event context from the GitHub Actions runtime.

The runner writes the webhook payload to ``GITHUB_EVENT_PATH``. A missing
file is not an error here (``payload`` stays None and the resolver decides);
a file that exists but is not a JSON object is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bitrise_trigger.config.model_trigger_settings import (
    ModelGitHubRuntimeSettings,
)
from bitrise_trigger.errors import ConfigError
from bitrise_trigger.models.model_event_context import (
    ModelEventContext,
    ModelEventPayload,
)

logger = logging.getLogger(__name__)


def event_context_from_payload(
    payload: dict[str, Any] | None,
    *,
    event_name: str = "",
    ref: str = "",
    sha: str = "",
    actor: str = "",
) -> ModelEventContext:
    """Create an event context from an already-decoded payload.

    Raises:
        ConfigError: If the payload does not have the webhook shape.
    """
    parsed: ModelEventPayload | None = None
    if payload is not None:
        try:
            parsed = ModelEventPayload.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError.missing_payload(
                f"Event payload has an unexpected shape: {exc}"
            ) from exc
    return ModelEventContext(
        event_name=event_name,
        ref=ref,
        sha=sha,
        actor=actor,
        payload=parsed,
    )


def read_event_payload(event_path: str | Path | None) -> dict[str, Any] | None:
    """Read the webhook payload file.

    Returns:
        The decoded JSON object, or None when there is no file.

    Raises:
        ConfigError: If the file is unreadable or not a JSON object.
    """
    if event_path is None:
        logger.debug("GITHUB_EVENT_PATH is not set, no event payload")
        return None
    path = Path(event_path)
    if not path.exists():
        logger.debug("GITHUB_EVENT_PATH %s does not exist", path)
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError.missing_payload(
            f"Could not read event payload {str(path)!r}: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError.missing_payload(
            f"Event payload {str(path)!r} is not a JSON object"
        )
    return data


def load_event_context(
    runtime: ModelGitHubRuntimeSettings | None = None,
    event_path: str | Path | None = None,
) -> ModelEventContext:
    """Load the event context of the current job.

    Args:
        runtime: Runtime settings; read from the environment when None.
        event_path: Overrides ``runtime.event_path``.
    """
    if runtime is None:
        runtime = ModelGitHubRuntimeSettings()
    payload = read_event_payload(event_path if event_path is not None else runtime.event_path)
    return event_context_from_payload(
        payload,
        event_name=runtime.event_name,
        ref=runtime.ref,
        sha=runtime.sha,
        actor=runtime.actor,
    )


__all__ = [
    "event_context_from_payload",
    "load_event_context",
    "read_event_payload",
]
