# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""User-supplied inputs that steer build-option resolution."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelOverrides(BaseModel):
    """Overrides and build target selected by the workflow author.

    Workflow and pipeline are mutually exclusive; the resolver reports a
    ``ConfigError`` rather than this model, so that a misconfigured action
    fails with a readable message instead of a validation dump.

    Attributes:
        branch_override: Branch name, ``refs/heads/<branch>`` or ``refs/tags/<tag>``.
        commit_override: Commit SHA to build instead of the event's.
        workflow_id: Bitrise workflow to run.
        pipeline_id: Bitrise pipeline to run.
        listen: Wait for the build to finish (workflow builds only).
        skip_git_status_report: Ask Bitrise not to report commit statuses.
        env_var_names: Names of process environment variables to pass through.
    """

    branch_override: str = Field(default="", description="Branch or ref override")
    commit_override: str = Field(default="", description="Commit SHA override")
    workflow_id: str | None = Field(default=None, description="Bitrise workflow id")
    pipeline_id: str | None = Field(default=None, description="Bitrise pipeline id")
    listen: bool = Field(default=False, description="Wait for the build result")
    skip_git_status_report: bool = Field(
        default=False, description="Disable Bitrise commit status reporting"
    )
    env_var_names: list[str] = Field(
        default_factory=list, description="Environment variables to pass through"
    )

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def has_ref_override(self) -> bool:
        """True when either the branch/ref or the commit is overridden."""
        return bool(self.branch_override or self.commit_override)


__all__ = ["ModelOverrides"]
