"""GitHub Actions integration: event context loading and log routing."""

from bitrise_trigger.github.event_loader import (
    event_context_from_payload,
    load_event_context,
    read_event_payload,
)
from bitrise_trigger.github.workflow_commands import (
    GitHubActionsFormatter,
    configure_logging,
)

__all__ = [
    "GitHubActionsFormatter",
    "configure_logging",
    "event_context_from_payload",
    "load_event_context",
    "read_event_payload",
]
