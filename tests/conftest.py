"""
Pytest configuration and fixtures for bitrise_trigger tests.

Payload factories return plain dicts shaped like the GitHub webhook
payloads the runner writes to GITHUB_EVENT_PATH.
"""

import os
from collections.abc import Callable
from typing import Any

import pytest

PayloadFactory = Callable[..., dict[str, Any]]

HEAD_SHA = "9f2c1e0b7d6a5c4b3a29180706f5e4d3c2b1a098"
PR_HEAD_SHA = "1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d"

# =========================================================================
# Repository descriptors
# =========================================================================


def repository_dict(
    owner: str = "octo-org",
    name: str = "mobile-app",
    private: bool = False,
) -> dict[str, Any]:
    return {
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "clone_url": f"https://github.com/{owner}/{name}.git",
        "ssh_url": f"git@github.com:{owner}/{name}.git",
        "private": private,
    }


@pytest.fixture
def make_repository() -> PayloadFactory:
    """Provide a factory for repository descriptors."""
    return repository_dict


# =========================================================================
# Push / tag events
# =========================================================================


@pytest.fixture
def make_push_payload() -> PayloadFactory:
    """Provide a factory for push event payloads (two commits by default)."""

    def factory(
        commits: list[dict[str, Any]] | None = None,
        include_commits: bool = True,
        head_message: str = "Bump version",
        deleted: bool = False,
        private: bool = False,
    ) -> dict[str, Any]:
        if commits is None:
            commits = [
                {
                    "id": "c1",
                    "message": "Add login screen",
                    "added": ["app/login.swift"],
                    "removed": [],
                    "modified": ["app/router.swift"],
                },
                {
                    "id": HEAD_SHA,
                    "message": head_message,
                    "added": [],
                    "removed": ["old.txt"],
                    "modified": ["VERSION"],
                },
            ]
        payload: dict[str, Any] = {
            "deleted": deleted,
            "head_commit": {
                "id": HEAD_SHA,
                "message": head_message,
                "added": [],
                "removed": ["old.txt"],
                "modified": ["VERSION"],
            },
            "repository": repository_dict(private=private),
            "pusher": {"name": "monalisa", "email": "mona@example.com"},
            "sender": {"login": "monalisa"},
        }
        if include_commits:
            payload["commits"] = commits
        return payload

    return factory


# =========================================================================
# Pull request events
# =========================================================================


@pytest.fixture
def make_pull_request_payload() -> PayloadFactory:
    """Provide a factory for pull_request event payloads from a fork."""

    def factory(
        number: int = 42,
        mergeable: bool | None = True,
        draft: bool = False,
        action: str = "opened",
        title: str = "Add dark mode",
        body: str | None = "Implements the dark theme.",
        head_private: bool = False,
    ) -> dict[str, Any]:
        base_repo = repository_dict()
        head_repo = repository_dict(owner="contributor", private=head_private)
        return {
            "action": action,
            "number": number,
            "pull_request": {
                "number": number,
                "title": title,
                "body": body,
                "mergeable": mergeable,
                "draft": draft,
                "diff_url": f"https://github.com/octo-org/mobile-app/pull/{number}.diff",
                "user": {"login": "contributor"},
                "head": {"ref": "feature/dark-mode", "sha": PR_HEAD_SHA, "repo": head_repo},
                "base": {"ref": "main", "sha": "b" * 40, "repo": base_repo},
            },
            "repository": base_repo,
            "sender": {"login": "contributor"},
        }

    return factory


# =========================================================================
# Environment isolation
# =========================================================================


@pytest.fixture
def clean_action_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove INPUT_* and GITHUB_* variables inherited from the test runner."""
    for key in list(os.environ):
        if key.upper().startswith(("INPUT_", "GITHUB_")):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
