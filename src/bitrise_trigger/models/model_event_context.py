# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pydantic models for the GitHub Actions triggering event.

The models validate the raw webhook payload GitHub writes to
``GITHUB_EVENT_PATH`` and keep only the fields build-option resolution
needs. Unknown keys are ignored, so the full payload dict can be passed
straight to ``ModelEventPayload.model_validate``.

Payload shape (push event, trimmed)::

    {
      "ref": "refs/heads/main",
      "deleted": false,
      "commits": [{"id": "...", "message": "...", "added": [], ...}],
      "head_commit": {"id": "...", "message": "..."},
      "repository": {"clone_url": "...", "ssh_url": "...", "private": false},
      "pusher": {"name": "octocat"}
    }
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from bitrise_trigger.models.enum_event_kind import EnumEventKind

BRANCH_REF_PREFIX = "refs/heads/"
TAG_REF_PREFIX = "refs/tags/"


class ModelGitHubUser(BaseModel):
    """A GitHub account reference (repository owner, PR author, sender)."""

    login: str | None = Field(default=None, description="Account login")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelPusher(BaseModel):
    """The ``pusher`` object of a push event (name, not login)."""

    name: str | None = Field(default=None, description="Git author name of the pusher")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelRepository(BaseModel):
    """Repository descriptor as found in event payloads.

    Attributes:
        full_name: ``owner/name``.
        owner: Owning account.
        clone_url: HTTPS clone URL.
        ssh_url: SSH clone URL (``git@github.com:owner/name.git``).
        private: Private repositories are cloned over SSH.
    """

    full_name: str | None = Field(default=None, description="owner/name")
    owner: ModelGitHubUser | None = Field(default=None, description="Owning account")
    clone_url: str | None = Field(default=None, description="HTTPS clone URL")
    ssh_url: str | None = Field(default=None, description="SSH clone URL")
    private: bool = Field(default=False, description="Whether the repository is private")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def owner_login(self) -> str | None:
        return self.owner.login if self.owner else None


class ModelCommit(BaseModel):
    """A single commit from a push event, with its changed paths."""

    id: str | None = Field(default=None, description="Commit SHA")
    message: str = Field(default="", description="Full commit message")
    added: list[str] = Field(default_factory=list, description="Added paths")
    removed: list[str] = Field(default_factory=list, description="Removed paths")
    modified: list[str] = Field(default_factory=list, description="Modified paths")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelPullRequestBranch(BaseModel):
    """The ``head`` or ``base`` side of a pull request."""

    ref: str | None = Field(default=None, description="Branch name (no refs/heads/)")
    sha: str | None = Field(default=None, description="Tip commit SHA")
    repo: ModelRepository | None = Field(
        default=None,
        description="Repository of this side; None when a fork was deleted",
    )

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def repo_owner_login(self) -> str | None:
        return self.repo.owner_login if self.repo else None


class ModelPullRequest(BaseModel):
    """Pull request object of a ``pull_request`` event.

    ``mergeable`` is tri-state: GitHub computes it asynchronously and sends
    null while the test merge commit is not up to date.
    """

    number: int = Field(..., description="Pull request number", ge=1)
    title: str | None = Field(default=None, description="Pull request title")
    body: str | None = Field(default=None, description="Pull request description")
    mergeable: bool | None = Field(
        default=None, description="True/False once computed, None while unknown"
    )
    draft: bool = Field(default=False, description="Whether the PR is a draft")
    diff_url: str | None = Field(default=None, description="URL of the .diff view")
    head: ModelPullRequestBranch = Field(
        default_factory=ModelPullRequestBranch, description="Source side"
    )
    base: ModelPullRequestBranch = Field(
        default_factory=ModelPullRequestBranch, description="Target side"
    )
    user: ModelGitHubUser | None = Field(default=None, description="PR author")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def author_login(self) -> str | None:
        return self.user.login if self.user else None


class ModelEventPayload(BaseModel):
    """The subset of the webhook payload used for build-option resolution.

    ``commits`` is kept as None (not an empty list) when the key is missing,
    because the head commit is used as a fallback only in that case.
    """

    deleted: bool = Field(default=False, description="The event deleted its ref")
    commits: list[ModelCommit] | None = Field(
        default=None, description="Pushed commits, oldest first"
    )
    head_commit: ModelCommit | None = Field(default=None, description="Tip commit")
    repository: ModelRepository | None = Field(default=None, description="Repository")
    pull_request: ModelPullRequest | None = Field(
        default=None, description="Pull request, for pull_request* events"
    )
    action: str | None = Field(
        default=None, description="Activity type (e.g. opened, ready_for_review)"
    )
    sender: ModelGitHubUser | None = Field(default=None, description="Event sender")
    pusher: ModelPusher | None = Field(default=None, description="Push author")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelEventContext(BaseModel):
    """Everything known about the triggering event.

    Mirrors the GitHub Actions runtime context: the workflow-level values
    come from ``GITHUB_*`` environment variables, the payload from the event
    file. ``payload`` is None when no event file was available.

    Example::

        context = ModelEventContext(
            event_name="push",
            ref="refs/heads/main",
            sha="a1b2c3",
            payload=ModelEventPayload.model_validate(raw_event),
        )
    """

    event_name: str = Field(default="", description="GITHUB_EVENT_NAME")
    ref: str = Field(default="", description="GITHUB_REF")
    sha: str = Field(default="", description="GITHUB_SHA")
    actor: str = Field(default="", description="GITHUB_ACTOR")
    payload: ModelEventPayload | None = Field(
        default=None, description="Parsed webhook payload"
    )

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def pull_request(self) -> ModelPullRequest | None:
        return self.payload.pull_request if self.payload else None

    @property
    def event_kind(self) -> EnumEventKind:
        """Classify the event for logging and dispatch."""
        if self.pull_request is not None:
            return EnumEventKind.PULL_REQUEST
        if self.ref.startswith(TAG_REF_PREFIX):
            return EnumEventKind.TAG
        if self.event_name == "push" and self.ref.startswith(BRANCH_REF_PREFIX):
            return EnumEventKind.PUSH
        return EnumEventKind.OTHER


__all__ = [
    "BRANCH_REF_PREFIX",
    "TAG_REF_PREFIX",
    "ModelCommit",
    "ModelEventContext",
    "ModelEventPayload",
    "ModelGitHubUser",
    "ModelPullRequest",
    "ModelPullRequestBranch",
    "ModelPusher",
    "ModelRepository",
]
