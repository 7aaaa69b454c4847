# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pull request ready states understood by the Bitrise build API."""

from __future__ import annotations

from enum import StrEnum


class EnumPullRequestReadyState(StrEnum):
    """Ready state of a pull request at the time of the event.

    CONVERTED_TO_READY_FOR_REVIEW wins over DRAFT: the event that converts a
    draft still carries ``draft`` in some payloads.
    """

    DRAFT = "draft"
    READY_FOR_REVIEW = "ready_for_review"
    CONVERTED_TO_READY_FOR_REVIEW = "converted_to_ready_for_review"


__all__ = ["EnumPullRequestReadyState"]
