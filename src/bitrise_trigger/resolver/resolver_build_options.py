# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Resolve Bitrise build options from a GitHub event and user overrides.

Precedence, highest first:

1. Branch/ref or commit overrides (``_process_overrides``).
2. Pull request events (``_transform_pull_request``).
3. The plain triggering event (``_transform_basic_event``).

The plain event is transformed whenever a payload exists, even when a
higher-precedence path wins: overrides compare against it to decide whether
they name the event's own branch, and a deleted-ref event fails every path.

Field mapping follows the Bitrise GitHub webhook processor, so a build
started from this action looks the same as one started by the webhook.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping

from bitrise_trigger.errors import ConfigError
from bitrise_trigger.models.enum_event_kind import EnumEventKind
from bitrise_trigger.models.enum_pull_request_ready_state import (
    EnumPullRequestReadyState,
)
from bitrise_trigger.models.model_app_details import ModelAppDetails
from bitrise_trigger.models.model_build_options import (
    ModelBuildOptions,
    ModelCommitPaths,
    ModelPartialBuildOptions,
)
from bitrise_trigger.models.model_event_context import (
    BRANCH_REF_PREFIX,
    TAG_REF_PREFIX,
    ModelEventContext,
    ModelPullRequest,
)
from bitrise_trigger.models.model_overrides import ModelOverrides
from bitrise_trigger.resolver.environment import (
    draft_pull_request_environment,
    prepare_environments,
)
from bitrise_trigger.resolver.repository_url import (
    select_repository_url,
    urls_refer_to_same_repo,
)

logger = logging.getLogger(__name__)

READY_FOR_REVIEW_ACTION = "ready_for_review"


def pull_request_merge_branch(number: int) -> str:
    return f"pull/{number}/merge"


def pull_request_head_branch(number: int) -> str:
    return f"pull/{number}/head"


def get_pull_request_ready_state(
    pull_request: ModelPullRequest,
    action: str | None,
) -> EnumPullRequestReadyState:
    """Derive the ready state from the event action and the draft flag."""
    if action == READY_FOR_REVIEW_ACTION:
        return EnumPullRequestReadyState.CONVERTED_TO_READY_FOR_REVIEW
    if pull_request.draft:
        return EnumPullRequestReadyState.DRAFT
    return EnumPullRequestReadyState.READY_FOR_REVIEW


class ResolverBuildOptions:
    """Turns an event context and overrides into ``ModelBuildOptions``.

    The resolver holds no state; one instance can resolve any number of
    contexts. All fatal problems raise ``ConfigError`` before anything is
    returned. Non-fatal anomalies are logged as warnings.

    Usage::

        resolver = ResolverBuildOptions()
        options = resolver.resolve(context, overrides, app_details=app)
        client.trigger_build(app_slug, options, triggered_by=actor)
    """

    def resolve(
        self,
        context: ModelEventContext,
        overrides: ModelOverrides,
        app_details: ModelAppDetails | None = None,
        environ: Mapping[str, str | None] | None = None,
    ) -> ModelBuildOptions:
        """Resolve the build options for one CI run.

        Args:
            context: The triggering event.
            overrides: Build target, overrides and env passthrough list.
            app_details: Known Bitrise app metadata, None when unavailable.
            environ: Environment snapshot for passthrough; defaults to
                ``os.environ``.

        Returns:
            Immutable build options ready for submission.

        Raises:
            ConfigError: On an invalid target selection, a deleted-ref event,
                an unmergeable pull request or a missing payload.
        """
        self._validate_target(overrides)

        event_kind = context.event_kind
        logger.info('Process "%s" event (%s)', context.event_name, event_kind)

        environments = prepare_environments(
            overrides.env_var_names,
            os.environ if environ is None else environ,
        )

        default_options: ModelPartialBuildOptions | None = None
        if context.payload is not None:
            default_options = self._transform_basic_event(context)

        pull_request = context.pull_request
        if overrides.has_ref_override:
            options = self._process_overrides(
                app_details,
                default_options,
                overrides.branch_override,
                overrides.commit_override,
            )
        elif event_kind is EnumEventKind.PULL_REQUEST and pull_request is not None:
            action = context.payload.action if context.payload else None
            options = self._transform_pull_request(pull_request, action)
            if pull_request.draft:
                environments.append(draft_pull_request_environment())
        elif default_options is None:
            raise ConfigError.missing_payload()
        else:
            options = default_options

        self._check_app_repository(app_details, options)

        logger.info(
            "Following source options will be sent to Bitrise: %s",
            json.dumps(options.model_dump(mode="json", exclude_none=True), indent=2),
        )

        return ModelBuildOptions.from_partial(
            options,
            workflow_id=overrides.workflow_id or None,
            pipeline_id=overrides.pipeline_id or None,
            skip_git_status_report=overrides.skip_git_status_report,
            environments=environments,
        )

    def _validate_target(self, overrides: ModelOverrides) -> None:
        """Exactly one of workflow/pipeline; listen only with a workflow."""
        if not overrides.workflow_id and not overrides.pipeline_id:
            raise ConfigError.missing_workflow_or_pipeline()
        if overrides.workflow_id and overrides.pipeline_id:
            raise ConfigError.workflow_and_pipeline()
        if overrides.pipeline_id and overrides.listen:
            raise ConfigError.listen_with_pipeline()

    def _transform_basic_event(
        self,
        context: ModelEventContext,
    ) -> ModelPartialBuildOptions:
        """Map a push/tag (or any other) event onto source options.

        Commit messages and changed paths are aggregated for branch pushes
        only; the two lists stay index-aligned.
        """
        payload = context.payload
        if payload is None:
            raise ConfigError.missing_payload()
        if payload.deleted:
            raise ConfigError.deleted_event()

        if payload.commits is not None:
            commits = payload.commits
        elif payload.head_commit is not None:
            commits = [payload.head_commit]
        else:
            commits = []

        branch: str | None = None
        tag: str | None = None
        commit_messages: list[str] = []
        commit_paths: list[ModelCommitPaths] = []

        ref = context.ref
        if ref.startswith(BRANCH_REF_PREFIX):
            branch = ref[len(BRANCH_REF_PREFIX) :]
            for commit in commits:
                commit_messages.append(commit.message)
                commit_paths.append(
                    ModelCommitPaths(
                        added=commit.added,
                        removed=commit.removed,
                        modified=commit.modified,
                    )
                )
        elif ref.startswith(TAG_REF_PREFIX):
            tag = ref[len(TAG_REF_PREFIX) :]

        return ModelPartialBuildOptions(
            branch=branch,
            tag=tag,
            commit_hash=context.sha or None,
            commit_message=payload.head_commit.message if payload.head_commit else None,
            commit_messages=tuple(commit_messages),
            commit_paths=tuple(commit_paths),
            base_repository_url=select_repository_url(payload.repository),
        )

    def _transform_pull_request(
        self,
        pull_request: ModelPullRequest,
        action: str | None,
    ) -> ModelPartialBuildOptions:
        """Map a pull request onto source options.

        ``mergeable`` is None while GitHub recomputes the test merge commit;
        the merge ref is then stale and only the unverified merge branch is
        reported.
        """
        number = pull_request.number
        unverified_merge_branch = pull_request_merge_branch(number)

        merge_ref_up_to_date = pull_request.mergeable is not None
        if merge_ref_up_to_date and pull_request.mergeable is False:
            raise ConfigError.not_mergeable(number)

        commit_message = pull_request.title or ""
        if pull_request.body:
            commit_message += f"\n\n{pull_request.body}"

        head_repository_url = select_repository_url(pull_request.head.repo)

        return ModelPartialBuildOptions(
            pull_request_unverified_merge_branch=unverified_merge_branch,
            pull_request_merge_branch=(
                unverified_merge_branch if merge_ref_up_to_date else None
            ),
            commit_hash=pull_request.head.sha,
            commit_message=commit_message,
            branch=pull_request.head.ref,
            branch_repo_owner=pull_request.head.repo_owner_login,
            branch_dest=pull_request.base.ref,
            branch_dest_repo_owner=pull_request.base.repo_owner_login,
            pull_request_id=number,
            head_repository_url=head_repository_url,
            pull_request_repository_url=head_repository_url,
            base_repository_url=select_repository_url(pull_request.base.repo),
            pull_request_head_branch=pull_request_head_branch(number),
            pull_request_author=pull_request.author_login,
            diff_url=pull_request.diff_url,
            pull_request_ready_state=get_pull_request_ready_state(pull_request, action),
        )

    def _process_overrides(
        self,
        app_details: ModelAppDetails | None,
        default_options: ModelPartialBuildOptions | None,
        branch_override: str,
        commit_override: str,
    ) -> ModelPartialBuildOptions:
        """Build source options from branch/ref and commit overrides.

        An override naming the event's own branch or tag, in the app's own
        repository, collapses back to the full event options. A commit
        override different from the event commit keeps only the target ref
        and repository.
        """
        if app_details is None:
            logger.warning(
                "Bitrise app details are unavailable, override options are not "
                "checked against the app's repository"
            )

        app_repo_url = app_details.repo_url if app_details else None
        options = ModelPartialBuildOptions(base_repository_url=app_repo_url)
        options = options.override_with(self._parse_ref_override(branch_override))

        if (
            branch_override
            and default_options is not None
            and self._names_same_ref(options, default_options)
            and app_repo_url
            and urls_refer_to_same_repo(app_repo_url, default_options.base_repository_url)
        ):
            logger.debug(
                "Override %r matches the triggering event, using event options",
                branch_override,
            )
            options = options.override_with(default_options)

        default_commit = default_options.commit_hash if default_options else None
        if commit_override and commit_override != default_commit:
            options = options.narrowed_to_commit(commit_override)

        return options

    def _parse_ref_override(self, branch_override: str) -> ModelPartialBuildOptions:
        """Interpret ``refs/heads/x``, ``refs/tags/x`` or a bare branch name."""
        if branch_override.startswith(BRANCH_REF_PREFIX):
            return ModelPartialBuildOptions(
                branch=branch_override[len(BRANCH_REF_PREFIX) :]
            )
        if branch_override.startswith(TAG_REF_PREFIX):
            return ModelPartialBuildOptions(tag=branch_override[len(TAG_REF_PREFIX) :])
        if branch_override:
            return ModelPartialBuildOptions(branch=branch_override)
        return ModelPartialBuildOptions()

    def _names_same_ref(
        self,
        options: ModelPartialBuildOptions,
        default_options: ModelPartialBuildOptions,
    ) -> bool:
        if options.branch and options.branch == default_options.branch:
            return True
        return bool(options.tag and options.tag == default_options.tag)

    def _check_app_repository(
        self,
        app_details: ModelAppDetails | None,
        options: ModelPartialBuildOptions,
    ) -> None:
        """Warn when the Bitrise app builds a different repository."""
        if app_details is None or not app_details.repo_url:
            return
        if not urls_refer_to_same_repo(app_details.repo_url, options.base_repository_url):
            logger.warning(
                'Bitrise App\'s repository url "%s" doesn\'t match current '
                'repository url "%s"',
                app_details.repo_url,
                options.base_repository_url,
            )


def resolve_build_options(
    context: ModelEventContext,
    overrides: ModelOverrides,
    app_details: ModelAppDetails | None = None,
    environ: Mapping[str, str | None] | None = None,
) -> ModelBuildOptions:
    """Module-level shortcut for ``ResolverBuildOptions().resolve``."""
    return ResolverBuildOptions().resolve(context, overrides, app_details, environ)


__all__ = [
    "READY_FOR_REVIEW_ACTION",
    "ResolverBuildOptions",
    "get_pull_request_ready_state",
    "pull_request_head_branch",
    "pull_request_merge_branch",
    "resolve_build_options",
]
