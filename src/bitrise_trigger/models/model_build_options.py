# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Build options sent to the Bitrise build trigger API.

Resolution works on ``ModelPartialBuildOptions``: each transform (push/tag
event, pull request, override) produces a partial, and partials are combined
with ``override_with``. The final ``ModelBuildOptions`` adds the build target
(workflow or pipeline) and the environment list.

Both models re-validate on every construction, so the branch/tag exclusion
holds after each merge step and a violating merge fails immediately.
Collections are tuples so that resolved options cannot be changed in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field, model_validator

from bitrise_trigger.models.enum_pull_request_ready_state import (
    EnumPullRequestReadyState,
)


class ModelCommitPaths(BaseModel):
    """Paths changed by one pushed commit, used for Bitrise path filters."""

    added: tuple[str, ...] = Field(default_factory=tuple)
    removed: tuple[str, ...] = Field(default_factory=tuple)
    modified: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelEnvironment(BaseModel):
    """A build environment variable passed to Bitrise.

    Serialized as ``{"mapped_to": ..., "value": ..., "is_expand": ...}``.
    """

    name: str = Field(..., min_length=1, serialization_alias="mapped_to")
    value: str = Field(default="")
    is_expand: bool = Field(default=False)

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelPartialBuildOptions(BaseModel):
    """Source options produced by one resolution step.

    Every field is optional; None means "not set by this step". Use
    ``override_with`` to merge, never dict-spreading.
    """

    branch: str | None = None
    tag: str | None = None
    commit_hash: str | None = None
    commit_message: str | None = None
    commit_messages: tuple[str, ...] | None = None
    commit_paths: tuple[ModelCommitPaths, ...] | None = None
    base_repository_url: str | None = None
    head_repository_url: str | None = None
    branch_repo_owner: str | None = None
    branch_dest: str | None = None
    branch_dest_repo_owner: str | None = None
    diff_url: str | None = None
    pull_request_id: int | None = None
    pull_request_author: str | None = None
    pull_request_repository_url: str | None = None
    pull_request_merge_branch: str | None = None
    pull_request_unverified_merge_branch: str | None = None
    pull_request_head_branch: str | None = None
    pull_request_ready_state: EnumPullRequestReadyState | None = None

    model_config = {"frozen": True, "extra": "forbid", "from_attributes": True}

    @model_validator(mode="after")
    def validate_branch_tag_exclusive(self) -> ModelPartialBuildOptions:
        """A build targets either a branch or a tag, never both."""
        if self.branch is not None and self.tag is not None:
            raise ValueError(
                f"branch ({self.branch!r}) and tag ({self.tag!r}) cannot both be set"
            )
        return self

    def source_fields(self) -> dict[str, Any]:
        """Return the set (non-None) source fields of this partial."""
        return {
            name: getattr(self, name)
            for name in ModelPartialBuildOptions.model_fields
            if getattr(self, name) is not None
        }

    def override_with(self, other: ModelPartialBuildOptions) -> ModelPartialBuildOptions:
        """Merge ``other`` over this partial, field by field.

        Fields set in ``other`` replace the same fields here; fields left
        None in ``other`` keep their current value.

        Raises:
            pydantic.ValidationError: If the merged result sets both branch
                and tag.
        """
        return ModelPartialBuildOptions(**{**self.source_fields(), **other.source_fields()})

    def narrowed_to_commit(self, commit_hash: str) -> ModelPartialBuildOptions:
        """Keep only the target ref and repository, pinned to ``commit_hash``.

        Used when a specific commit other than the event's is requested:
        messages, paths and PR metadata of the event do not describe it.
        """
        return ModelPartialBuildOptions(
            branch=self.branch,
            tag=self.tag,
            commit_hash=commit_hash,
            base_repository_url=self.base_repository_url,
        )


class ModelBuildOptions(ModelPartialBuildOptions):
    """Final, immutable build options for one trigger request.

    Example::

        options = ModelBuildOptions(
            branch="main",
            commit_hash="a1b2c3",
            workflow_id="primary",
        )
        client.trigger_build(app_slug, options, triggered_by="octocat")
    """

    workflow_id: str | None = None
    pipeline_id: str | None = None
    skip_git_status_report: bool = False
    environments: tuple[ModelEnvironment, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_single_target(self) -> ModelBuildOptions:
        """Exactly one of workflow_id and pipeline_id must be set."""
        if (self.workflow_id is None) == (self.pipeline_id is None):
            raise ValueError("exactly one of workflow_id and pipeline_id must be set")
        return self

    @classmethod
    def from_partial(
        cls,
        partial: ModelPartialBuildOptions,
        *,
        workflow_id: str | None,
        pipeline_id: str | None,
        skip_git_status_report: bool,
        environments: Sequence[ModelEnvironment],
    ) -> ModelBuildOptions:
        return cls(
            **partial.source_fields(),
            workflow_id=workflow_id,
            pipeline_id=pipeline_id,
            skip_git_status_report=skip_git_status_report,
            environments=tuple(environments),
        )

    def to_build_params(self) -> dict[str, Any]:
        """Render the ``build_params`` object of a Bitrise trigger request."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


__all__ = [
    "ModelBuildOptions",
    "ModelCommitPaths",
    "ModelEnvironment",
    "ModelPartialBuildOptions",
]
