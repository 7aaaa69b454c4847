# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Resolve who triggered the build, for the ``triggered_by`` field."""

from __future__ import annotations

from bitrise_trigger.models.model_event_context import ModelEventContext


def resolve_actor_username(context: ModelEventContext) -> str:
    """Return the most specific username for the triggering event.

    Pull request events report the sender, push events the pusher. Any
    other event, or a payload lacking those objects, falls back to the
    workflow actor.
    """
    payload = context.payload
    if payload is not None:
        if context.event_name == "pull_request" and payload.sender is not None:
            if payload.sender.login:
                return payload.sender.login
        elif context.event_name == "push" and payload.pusher is not None:
            if payload.pusher.name:
                return payload.pusher.name
    return context.actor


__all__ = ["resolve_actor_username"]
