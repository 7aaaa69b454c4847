# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pass allow-listed process environment variables on to the build."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from bitrise_trigger.models.model_build_options import ModelEnvironment

DRAFT_PR_ENV_NAME = "GITHUB_PR_IS_DRAFT"


def parse_env_var_names(raw: str | None) -> list[str]:
    """Split a comma separated list of names, dropping blanks."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def prepare_environments(
    names: Iterable[str],
    environ: Mapping[str, str | None],
) -> list[ModelEnvironment]:
    """Build environment entries for the allow-listed names.

    Entries follow the encounter order of ``environ``. Names missing from
    ``environ`` are skipped; a None value is sent as an empty string.
    Expansion is always disabled so values reach the build verbatim.
    """
    allowed = set(names)
    return [
        ModelEnvironment(name=key, value=value or "", is_expand=False)
        for key, value in environ.items()
        if key in allowed
    ]


def draft_pull_request_environment() -> ModelEnvironment:
    return ModelEnvironment(name=DRAFT_PR_ENV_NAME, value="true", is_expand=False)


__all__ = [
    "DRAFT_PR_ENV_NAME",
    "draft_pull_request_environment",
    "parse_env_var_names",
    "prepare_environments",
]
