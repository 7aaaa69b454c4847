"""Domain models for build-option resolution."""

from bitrise_trigger.models.enum_event_kind import EnumEventKind
from bitrise_trigger.models.enum_pull_request_ready_state import (
    EnumPullRequestReadyState,
)
from bitrise_trigger.models.model_app_details import ModelAppDetails
from bitrise_trigger.models.model_bitrise_responses import (
    ModelBuildStatus,
    ModelBuildTriggerResponse,
)
from bitrise_trigger.models.model_build_options import (
    ModelBuildOptions,
    ModelCommitPaths,
    ModelEnvironment,
    ModelPartialBuildOptions,
)
from bitrise_trigger.models.model_event_context import (
    ModelCommit,
    ModelEventContext,
    ModelEventPayload,
    ModelGitHubUser,
    ModelPullRequest,
    ModelPullRequestBranch,
    ModelPusher,
    ModelRepository,
)
from bitrise_trigger.models.model_overrides import ModelOverrides

__all__ = [
    "EnumEventKind",
    "EnumPullRequestReadyState",
    "ModelAppDetails",
    "ModelBuildOptions",
    "ModelBuildStatus",
    "ModelBuildTriggerResponse",
    "ModelCommit",
    "ModelCommitPaths",
    "ModelEnvironment",
    "ModelEventContext",
    "ModelEventPayload",
    "ModelGitHubUser",
    "ModelOverrides",
    "ModelPartialBuildOptions",
    "ModelPullRequest",
    "ModelPullRequestBranch",
    "ModelPusher",
    "ModelRepository",
]
