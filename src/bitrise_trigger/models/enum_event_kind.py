# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Kinds of triggering events the resolver distinguishes."""

from __future__ import annotations

from enum import StrEnum


class EnumEventKind(StrEnum):
    """Coarse classification of a GitHub Actions triggering event.

    PUSH - branch push (``refs/heads/...``).
    TAG - tag push (``refs/tags/...``).
    PULL_REQUEST - any event carrying a pull request.
    OTHER - manual dispatch, schedules and everything else.
    """

    PUSH = "push"
    TAG = "tag"
    PULL_REQUEST = "pull_request"
    OTHER = "other"


__all__ = ["EnumEventKind"]
