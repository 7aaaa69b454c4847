# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ResolverBuildOptions.

Covers:
- Target validation (workflow / pipeline / listen)
- Push, tag and other-ref events
- Pull request mapping, merge-ref safety and ready state
- Override precedence, collapse to the event options and commit narrowing
- App repository cross-check warnings
"""

from __future__ import annotations

import logging

import pytest

from bitrise_trigger.errors import ConfigError
from bitrise_trigger.github.event_loader import event_context_from_payload
from bitrise_trigger.models.enum_pull_request_ready_state import (
    EnumPullRequestReadyState,
)
from bitrise_trigger.models.model_app_details import ModelAppDetails
from bitrise_trigger.models.model_build_options import ModelCommitPaths
from bitrise_trigger.models.model_event_context import ModelEventContext
from bitrise_trigger.models.model_overrides import ModelOverrides
from bitrise_trigger.resolver.resolver_build_options import (
    ResolverBuildOptions,
    resolve_build_options,
)

HEAD_SHA = "9f2c1e0b7d6a5c4b3a29180706f5e4d3c2b1a098"
PR_HEAD_SHA = "1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d"
REPO_HTTPS = "https://github.com/octo-org/mobile-app.git"
REPO_SSH = "git@github.com:octo-org/mobile-app.git"

# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def make_overrides(**kwargs: object) -> ModelOverrides:
    kwargs.setdefault("workflow_id", "primary")
    return ModelOverrides(**kwargs)  # type: ignore[arg-type]


def push_context(payload: dict, ref: str = "refs/heads/main") -> ModelEventContext:
    return event_context_from_payload(
        payload, event_name="push", ref=ref, sha=HEAD_SHA, actor="monalisa"
    )


def pr_context(payload: dict) -> ModelEventContext:
    return event_context_from_payload(
        payload,
        event_name="pull_request",
        ref=f"refs/pull/{payload['number']}/merge",
        sha="c" * 40,
        actor="contributor",
    )


def resolve(context: ModelEventContext, overrides: ModelOverrides, **kwargs: object):
    kwargs.setdefault("environ", {})
    return ResolverBuildOptions().resolve(context, overrides, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Target validation
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestTargetValidation:
    def test_neither_workflow_nor_pipeline(self, make_push_payload) -> None:
        overrides = ModelOverrides()
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload()), overrides)
        assert exc_info.value.code == "TRIGGER_001"

    def test_both_workflow_and_pipeline(self, make_push_payload) -> None:
        overrides = ModelOverrides(workflow_id="primary", pipeline_id="release")
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload()), overrides)
        assert exc_info.value.code == "TRIGGER_002"

    def test_empty_strings_count_as_unset(self, make_push_payload) -> None:
        overrides = ModelOverrides(workflow_id="", pipeline_id="")
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload()), overrides)
        assert exc_info.value.code == "TRIGGER_001"

    def test_listen_with_pipeline(self, make_push_payload) -> None:
        overrides = ModelOverrides(pipeline_id="release", listen=True)
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload()), overrides)
        assert exc_info.value.code == "TRIGGER_003"

    def test_listen_with_workflow_is_allowed(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()), make_overrides(listen=True)
        )
        assert options.workflow_id == "primary"

    def test_validation_runs_before_event_checks(self, make_push_payload) -> None:
        """A deleted event with a bad target reports the target problem."""
        overrides = ModelOverrides()
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload(deleted=True)), overrides)
        assert exc_info.value.code == "TRIGGER_001"

    def test_pipeline_target(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()), ModelOverrides(pipeline_id="release")
        )
        assert options.pipeline_id == "release"
        assert options.workflow_id is None


# ---------------------------------------------------------------------------
# Push / tag / other events
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestBasicEvent:
    def test_branch_push(self, make_push_payload) -> None:
        options = resolve(push_context(make_push_payload()), make_overrides())

        assert options.branch == "main"
        assert options.tag is None
        assert options.commit_hash == HEAD_SHA
        assert options.commit_message == "Bump version"
        assert options.commit_messages == ("Add login screen", "Bump version")
        assert options.commit_paths == (
            ModelCommitPaths(
                added=["app/login.swift"], removed=[], modified=["app/router.swift"]
            ),
            ModelCommitPaths(added=[], removed=["old.txt"], modified=["VERSION"]),
        )
        assert options.base_repository_url == REPO_HTTPS
        assert options.pull_request_id is None

    def test_branch_with_slashes(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload(), ref="refs/heads/release/2.0"),
            make_overrides(),
        )
        assert options.branch == "release/2.0"

    def test_tag_push(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload(), ref="refs/tags/v1.0"), make_overrides()
        )

        assert options.tag == "v1.0"
        assert options.branch is None
        assert options.commit_hash == HEAD_SHA
        assert options.commit_message == "Bump version"
        assert options.commit_messages == ()
        assert options.commit_paths == ()

    def test_other_ref(self, make_push_payload) -> None:
        context = event_context_from_payload(
            make_push_payload(),
            event_name="workflow_dispatch",
            ref="refs/pull/7/merge",
            sha=HEAD_SHA,
        )
        options = resolve(context, make_overrides())

        assert options.branch is None
        assert options.tag is None
        assert options.commit_messages == ()
        assert options.commit_hash == HEAD_SHA

    def test_head_commit_used_when_commit_list_missing(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload(include_commits=False)), make_overrides()
        )
        assert options.commit_messages == ("Bump version",)
        assert options.commit_paths == (
            ModelCommitPaths(added=[], removed=["old.txt"], modified=["VERSION"]),
        )

    def test_empty_commit_list_is_not_replaced(self, make_push_payload) -> None:
        options = resolve(push_context(make_push_payload(commits=[])), make_overrides())
        assert options.commit_messages == ()
        assert options.commit_paths == ()

    def test_private_repository_uses_ssh(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload(private=True)), make_overrides()
        )
        assert options.base_repository_url == REPO_SSH

    def test_deleted_event(self, make_push_payload) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve(push_context(make_push_payload(deleted=True)), make_overrides())
        assert exc_info.value.code == "TRIGGER_004"

    def test_deleted_event_fails_with_overrides_too(self, make_push_payload) -> None:
        with pytest.raises(ConfigError):
            resolve(
                push_context(make_push_payload(deleted=True)),
                make_overrides(branch_override="main"),
            )

    def test_missing_payload(self) -> None:
        context = ModelEventContext(event_name="push", ref="refs/heads/main", sha=HEAD_SHA)
        with pytest.raises(ConfigError) as exc_info:
            resolve(context, make_overrides())
        assert exc_info.value.code == "TRIGGER_006"

    def test_target_and_flags_are_added(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(skip_git_status_report=True),
        )
        assert options.workflow_id == "primary"
        assert options.skip_git_status_report is True
        assert options.environments == ()

    def test_resolved_options_are_immutable(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(env_var_names=["API_LEVEL"]),
            environ={"API_LEVEL": "34"},
        )

        with pytest.raises(AttributeError):
            options.commit_messages.append("injected")  # type: ignore[union-attr]
        with pytest.raises(AttributeError):
            options.environments.clear()  # type: ignore[attr-defined]
        assert options.commit_messages == ("Add login screen", "Bump version")
        assert [e.name for e in options.environments] == ["API_LEVEL"]

    def test_module_level_shortcut(self, make_push_payload) -> None:
        options = resolve_build_options(
            push_context(make_push_payload()), make_overrides(), environ={}
        )
        assert options.branch == "main"


# ---------------------------------------------------------------------------
# Pull request events
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestPullRequestEvent:
    def test_field_mapping(self, make_pull_request_payload) -> None:
        options = resolve(pr_context(make_pull_request_payload()), make_overrides())

        assert options.pull_request_id == 42
        assert options.commit_hash == PR_HEAD_SHA
        assert options.commit_message == "Add dark mode\n\nImplements the dark theme."
        assert options.branch == "feature/dark-mode"
        assert options.branch_repo_owner == "contributor"
        assert options.branch_dest == "main"
        assert options.branch_dest_repo_owner == "octo-org"
        assert options.head_repository_url == "https://github.com/contributor/mobile-app.git"
        assert options.pull_request_repository_url == options.head_repository_url
        assert options.base_repository_url == REPO_HTTPS
        assert options.pull_request_head_branch == "pull/42/head"
        assert options.pull_request_author == "contributor"
        assert options.diff_url == "https://github.com/octo-org/mobile-app/pull/42.diff"
        assert options.tag is None
        assert options.commit_messages is None

    def test_mergeable_sets_merge_branch(self, make_pull_request_payload) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(mergeable=True)), make_overrides()
        )
        assert options.pull_request_unverified_merge_branch == "pull/42/merge"
        assert options.pull_request_merge_branch == "pull/42/merge"

    def test_unknown_mergeability_leaves_merge_branch_unset(
        self, make_pull_request_payload
    ) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(mergeable=None)), make_overrides()
        )
        assert options.pull_request_unverified_merge_branch == "pull/42/merge"
        assert options.pull_request_merge_branch is None

    def test_not_mergeable(self, make_pull_request_payload) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve(
                pr_context(make_pull_request_payload(mergeable=False)), make_overrides()
            )
        assert exc_info.value.code == "TRIGGER_005"
        assert "42" in exc_info.value.message

    @pytest.mark.parametrize("body", [None, ""])
    def test_commit_message_without_body(self, make_pull_request_payload, body) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(body=body)), make_overrides()
        )
        assert options.commit_message == "Add dark mode"

    def test_private_head_repository_uses_ssh(self, make_pull_request_payload) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(head_private=True)), make_overrides()
        )
        assert options.head_repository_url == "git@github.com:contributor/mobile-app.git"
        assert options.base_repository_url == REPO_HTTPS

    def test_deleted_fork(self, make_pull_request_payload) -> None:
        payload = make_pull_request_payload()
        payload["pull_request"]["head"]["repo"] = None
        options = resolve(pr_context(payload), make_overrides())
        assert options.head_repository_url is None
        assert options.branch_repo_owner is None

    def test_ready_for_review(self, make_pull_request_payload) -> None:
        options = resolve(pr_context(make_pull_request_payload()), make_overrides())
        assert options.pull_request_ready_state == EnumPullRequestReadyState.READY_FOR_REVIEW
        assert options.environments == ()

    def test_draft(self, make_pull_request_payload) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(draft=True, action="synchronize")),
            make_overrides(),
        )
        assert options.pull_request_ready_state == EnumPullRequestReadyState.DRAFT
        assert [(e.name, e.value, e.is_expand) for e in options.environments] == [
            ("GITHUB_PR_IS_DRAFT", "true", False)
        ]

    @pytest.mark.parametrize("draft", [True, False])
    def test_converted_to_ready_for_review(self, make_pull_request_payload, draft) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(draft=draft, action="ready_for_review")),
            make_overrides(),
        )
        assert (
            options.pull_request_ready_state
            == EnumPullRequestReadyState.CONVERTED_TO_READY_FOR_REVIEW
        )

    def test_draft_entry_follows_passthrough_entries(
        self, make_pull_request_payload
    ) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(draft=True)),
            make_overrides(env_var_names=["API_LEVEL"]),
            environ={"API_LEVEL": "34"},
        )
        assert [e.name for e in options.environments] == [
            "API_LEVEL",
            "GITHUB_PR_IS_DRAFT",
        ]


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestOverrides:
    app = ModelAppDetails(slug="app-slug", repo_url=REPO_SSH)

    def test_override_takes_precedence_over_pull_request(
        self, make_pull_request_payload
    ) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(draft=True)),
            make_overrides(branch_override="develop"),
            app_details=self.app,
        )
        assert options.branch == "develop"
        assert options.pull_request_id is None
        assert options.pull_request_ready_state is None
        assert options.environments == ()
        assert options.base_repository_url == REPO_SSH

    def test_override_precedes_unmergeable_pull_request(
        self, make_pull_request_payload
    ) -> None:
        options = resolve(
            pr_context(make_pull_request_payload(mergeable=False)),
            make_overrides(branch_override="develop"),
            app_details=self.app,
        )
        assert options.branch == "develop"

    @pytest.mark.parametrize(
        ("branch_override", "branch", "tag"),
        [
            ("refs/heads/develop", "develop", None),
            ("refs/tags/v2.0", None, "v2.0"),
            ("develop", "develop", None),
            ("feature/x", "feature/x", None),
        ],
    )
    def test_ref_override_parsing(
        self, make_push_payload, branch_override, branch, tag
    ) -> None:
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(branch_override=branch_override),
            app_details=self.app,
        )
        assert options.branch == branch
        assert options.tag == tag
        assert options.commit_hash is None
        assert options.commit_messages is None
        assert options.base_repository_url == REPO_SSH

    def test_same_branch_same_repo_collapses_to_event(self, make_push_payload) -> None:
        context = push_context(make_push_payload())
        event_options = resolve(context, make_overrides())

        options = resolve(
            context,
            make_overrides(branch_override="main"),
            app_details=self.app,
        )

        assert options == event_options
        assert options.commit_messages == ("Add login screen", "Bump version")
        assert options.base_repository_url == REPO_HTTPS

    def test_same_tag_same_repo_collapses_to_event(self, make_push_payload) -> None:
        context = push_context(make_push_payload(), ref="refs/tags/v1.0")
        options = resolve(
            context,
            make_overrides(branch_override="refs/tags/v1.0"),
            app_details=self.app,
        )
        assert options.tag == "v1.0"
        assert options.commit_hash == HEAD_SHA
        assert options.commit_message == "Bump version"

    def test_same_branch_different_repo_keeps_override(self, make_push_payload) -> None:
        app = ModelAppDetails(repo_url="https://github.com/someone-else/mobile-app.git")
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(branch_override="main"),
            app_details=app,
        )
        assert options.branch == "main"
        assert options.commit_hash is None
        assert options.commit_messages is None
        assert options.base_repository_url == app.repo_url

    def test_no_collapse_without_app_details(self, make_push_payload, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            options = resolve(
                push_context(make_push_payload()),
                make_overrides(branch_override="main"),
            )
        assert options.branch == "main"
        assert options.commit_hash is None
        assert options.base_repository_url is None
        assert "app details are unavailable" in caplog.text
        assert "bitrise-token" not in caplog.text

    def test_no_collapse_when_app_has_no_repo_url(self, make_push_payload, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            options = resolve(
                push_context(make_push_payload()),
                make_overrides(branch_override="main"),
                app_details=ModelAppDetails(slug="app-slug"),
            )
        assert options.commit_hash is None
        assert "app details are unavailable" not in caplog.text

    def test_different_commit_narrows_options(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(branch_override="main", commit_override="deadbeef"),
            app_details=self.app,
        )
        assert options.branch == "main"
        assert options.commit_hash == "deadbeef"
        assert options.base_repository_url == REPO_HTTPS
        assert options.commit_message is None
        assert options.commit_messages is None
        assert options.commit_paths is None

    def test_same_commit_does_not_narrow(self, make_push_payload) -> None:
        context = push_context(make_push_payload())
        options = resolve(
            context,
            make_overrides(branch_override="main", commit_override=HEAD_SHA),
            app_details=self.app,
        )
        assert options == resolve(context, make_overrides())

    def test_commit_override_alone(self, make_push_payload) -> None:
        options = resolve(
            push_context(make_push_payload()),
            make_overrides(commit_override="deadbeef"),
            app_details=self.app,
        )
        assert options.branch is None
        assert options.tag is None
        assert options.commit_hash == "deadbeef"
        assert options.base_repository_url == REPO_SSH

    def test_commit_override_without_payload(self) -> None:
        context = ModelEventContext(event_name="workflow_dispatch")
        options = resolve(
            context,
            make_overrides(branch_override="develop", commit_override="deadbeef"),
            app_details=self.app,
        )
        assert options.branch == "develop"
        assert options.commit_hash == "deadbeef"

    def test_override_without_payload(self) -> None:
        context = ModelEventContext(event_name="workflow_dispatch")
        options = resolve(
            context,
            make_overrides(branch_override="develop"),
            app_details=self.app,
        )
        assert options.branch == "develop"
        assert options.base_repository_url == REPO_SSH


# ---------------------------------------------------------------------------
# App repository cross-check
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestAppRepositoryWarning:
    def test_matching_repository_is_silent(self, make_push_payload, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            resolve(
                push_context(make_push_payload()),
                make_overrides(),
                app_details=ModelAppDetails(repo_url=REPO_SSH),
            )
        assert "doesn't match" not in caplog.text

    def test_mismatching_repository_warns(self, make_push_payload, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            options = resolve(
                push_context(make_push_payload()),
                make_overrides(),
                app_details=ModelAppDetails(repo_url="https://github.com/other/repo"),
            )
        assert "doesn't match" in caplog.text
        assert options.branch == "main"

    def test_resolved_options_are_logged(self, make_push_payload, caplog) -> None:
        with caplog.at_level(logging.INFO):
            resolve(push_context(make_push_payload()), make_overrides())
        assert "Following source options will be sent to Bitrise" in caplog.text
        assert '"branch": "main"' in caplog.text

    @pytest.mark.parametrize(
        ("ref", "expected"),
        [
            ("refs/heads/main", 'Process "push" event (push)'),
            ("refs/tags/v1.0", 'Process "push" event (tag)'),
        ],
    )
    def test_event_kind_is_logged(self, make_push_payload, caplog, ref, expected) -> None:
        with caplog.at_level(logging.INFO):
            resolve(push_context(make_push_payload(), ref=ref), make_overrides())
        assert expected in caplog.text

    def test_pull_request_kind_is_logged(self, make_pull_request_payload, caplog) -> None:
        with caplog.at_level(logging.INFO):
            resolve(pr_context(make_pull_request_payload()), make_overrides())
        assert 'Process "pull_request" event (pull_request)' in caplog.text
