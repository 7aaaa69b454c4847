"""Configuration loaded from the GitHub Actions environment."""

from bitrise_trigger.config.model_trigger_settings import (
    DEFAULT_BITRISE_API_URL,
    ModelGitHubRuntimeSettings,
    ModelTriggerSettings,
)

__all__ = [
    "DEFAULT_BITRISE_API_URL",
    "ModelGitHubRuntimeSettings",
    "ModelTriggerSettings",
]
