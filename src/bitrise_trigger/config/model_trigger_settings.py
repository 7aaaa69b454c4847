# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Action inputs and GitHub runtime values, loaded from the environment.

GitHub Actions exposes each ``with:`` input as ``INPUT_<NAME>`` with the name
upper-cased and hyphens kept (``INPUT_BITRISE-WORKFLOW``). Inputs that were
not provided arrive as empty strings and are treated as unset.

Environment variables (action inputs):
    INPUT_BITRISE-TOKEN: Bitrise API token (optional)
    INPUT_BITRISE-APP-SLUG: Bitrise app slug
    INPUT_BITRISE-WORKFLOW: Workflow to run
    INPUT_BITRISE-PIPELINE: Pipeline to run
    INPUT_LISTEN: Wait for the build result (default false)
    INPUT_BRANCH-OVERRIDE: Branch, refs/heads/<branch> or refs/tags/<tag>
    INPUT_COMMIT-OVERRIDE: Commit SHA to build
    INPUT_ENV-VARS-FOR-BITRISE: Comma separated env var names to pass through
    INPUT_SKIP-GIT-STATUS-REPORT: Disable Bitrise status reports (default false)
    INPUT_BITRISE-API-URL: API base URL (default https://api.bitrise.io)
    INPUT_LISTEN-POLL-INTERVAL-SECONDS: Poll interval in listen mode (default 10)
    INPUT_LISTEN-TIMEOUT-SECONDS: Give up listening after this long (default 3600)

Environment variables (runtime):
    GITHUB_EVENT_NAME, GITHUB_EVENT_PATH, GITHUB_REF, GITHUB_SHA, GITHUB_ACTOR
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bitrise_trigger.models.model_overrides import ModelOverrides
from bitrise_trigger.resolver.environment import parse_env_var_names

DEFAULT_BITRISE_API_URL = "https://api.bitrise.io"
DEFAULT_LISTEN_POLL_INTERVAL_SECONDS = 10.0
DEFAULT_LISTEN_TIMEOUT_SECONDS = 3600.0

# YAML 1.2 core schema booleans, as accepted by GitHub's getBooleanInput
_TRUE_VALUES = frozenset({"true", "True", "TRUE"})
_FALSE_VALUES = frozenset({"false", "False", "FALSE"})


class ModelTriggerSettings(BaseSettings):
    """Action inputs for one trigger run."""

    model_config = SettingsConfigDict(extra="ignore")

    bitrise_token: str | None = Field(
        default=None,
        validation_alias="INPUT_BITRISE-TOKEN",
        repr=False,
        description="Bitrise personal access token",
    )
    app_slug: str | None = Field(
        default=None,
        validation_alias="INPUT_BITRISE-APP-SLUG",
        description="Bitrise app slug",
    )
    workflow: str | None = Field(
        default=None,
        validation_alias="INPUT_BITRISE-WORKFLOW",
        description="Bitrise workflow id",
    )
    pipeline: str | None = Field(
        default=None,
        validation_alias="INPUT_BITRISE-PIPELINE",
        description="Bitrise pipeline id",
    )
    listen: bool = Field(
        default=False,
        validation_alias="INPUT_LISTEN",
        description="Wait for the build to finish",
    )
    branch_override: str = Field(
        default="",
        validation_alias="INPUT_BRANCH-OVERRIDE",
        description="Branch or ref override",
    )
    commit_override: str = Field(
        default="",
        validation_alias="INPUT_COMMIT-OVERRIDE",
        description="Commit SHA override",
    )
    env_vars_for_bitrise: str = Field(
        default="",
        validation_alias="INPUT_ENV-VARS-FOR-BITRISE",
        description="Comma separated names of env vars to pass through",
    )
    skip_git_status_report: bool = Field(
        default=False,
        validation_alias="INPUT_SKIP-GIT-STATUS-REPORT",
        description="Disable Bitrise commit status reporting",
    )
    api_url: str = Field(
        default=DEFAULT_BITRISE_API_URL,
        validation_alias="INPUT_BITRISE-API-URL",
        description="Bitrise API base URL",
    )
    listen_poll_interval_seconds: float = Field(
        default=DEFAULT_LISTEN_POLL_INTERVAL_SECONDS,
        gt=0.0,
        validation_alias="INPUT_LISTEN-POLL-INTERVAL-SECONDS",
        description="Seconds between build status polls",
    )
    listen_timeout_seconds: float = Field(
        default=DEFAULT_LISTEN_TIMEOUT_SECONDS,
        gt=0.0,
        validation_alias="INPUT_LISTEN-TIMEOUT-SECONDS",
        description="Maximum seconds to wait for the build",
    )

    @field_validator("bitrise_token", "app_slug", "workflow", "pipeline", mode="before")
    @classmethod
    def empty_as_none(cls, v: Any) -> Any:
        """Unset inputs arrive as empty strings."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("branch_override", "commit_override", mode="before")
    @classmethod
    def strip_override(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("api_url", mode="before")
    @classmethod
    def default_api_url(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_BITRISE_API_URL
        return v

    @field_validator("listen_poll_interval_seconds", mode="before")
    @classmethod
    def default_poll_interval(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_LISTEN_POLL_INTERVAL_SECONDS
        return v

    @field_validator("listen_timeout_seconds", mode="before")
    @classmethod
    def default_listen_timeout(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_LISTEN_TIMEOUT_SECONDS
        return v

    @field_validator("listen", "skip_git_status_report", mode="before")
    @classmethod
    def parse_core_schema_bool(cls, v: Any) -> Any:
        """Accept only the YAML 1.2 core schema spellings; empty means false."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            value = v.strip()
            if not value or value in _FALSE_VALUES:
                return False
            if value in _TRUE_VALUES:
                return True
        raise ValueError(
            "boolean input must be one of true, True, TRUE, false, False, FALSE; "
            f"got: {v!r}"
        )

    @property
    def env_var_names(self) -> list[str]:
        return parse_env_var_names(self.env_vars_for_bitrise)

    @property
    def can_query_app(self) -> bool:
        """True when both credentials for the Bitrise API are present."""
        return bool(self.bitrise_token and self.app_slug)

    def to_overrides(self) -> ModelOverrides:
        """Convert the inputs to a frozen ModelOverrides instance."""
        return ModelOverrides(
            branch_override=self.branch_override,
            commit_override=self.commit_override,
            workflow_id=self.workflow,
            pipeline_id=self.pipeline,
            listen=self.listen,
            skip_git_status_report=self.skip_git_status_report,
            env_var_names=self.env_var_names,
        )


class ModelGitHubRuntimeSettings(BaseSettings):
    """Default ``GITHUB_*`` variables of a GitHub Actions job."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        extra="ignore",
    )

    event_name: str = Field(default="", description="Name of the triggering event")
    event_path: str | None = Field(default=None, description="Path of the event JSON")
    ref: str = Field(default="", description="Fully formed ref of the event")
    sha: str = Field(default="", description="Commit SHA of the event")
    actor: str = Field(default="", description="User that triggered the workflow")

    @field_validator("event_path", mode="before")
    @classmethod
    def empty_path_as_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


__all__ = [
    "DEFAULT_BITRISE_API_URL",
    "ModelGitHubRuntimeSettings",
    "ModelTriggerSettings",
]
