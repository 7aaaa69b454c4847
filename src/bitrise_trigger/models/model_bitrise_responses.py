# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Responses of the Bitrise build endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Numeric build status codes of the Bitrise API
BUILD_STATUS_RUNNING = 0
BUILD_STATUS_SUCCESS = 1
BUILD_STATUS_FAILED = 2
BUILD_STATUS_ABORTED = 3
BUILD_STATUS_ABORTED_WITH_SUCCESS = 4


class ModelBuildTriggerResponse(BaseModel):
    """Body of ``POST /v0.1/apps/{app-slug}/builds``."""

    status: str = Field(..., description="'ok' on success")
    message: str | None = Field(default=None)
    slug: str | None = Field(default=None, description="App slug")
    service: str | None = Field(default=None)
    build_slug: str = Field(..., min_length=1)
    build_number: int | None = Field(default=None)
    build_url: str | None = Field(default=None)
    triggered_workflow: str | None = Field(default=None)

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


class ModelBuildStatus(BaseModel):
    """The ``data`` object of ``GET /v0.1/apps/{app-slug}/builds/{build-slug}``."""

    slug: str = Field(..., min_length=1)
    status: int = Field(..., ge=0)
    status_text: str | None = Field(default=None)
    build_number: int | None = Field(default=None)
    triggered_workflow: str | None = Field(default=None)

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def is_finished(self) -> bool:
        return self.status != BUILD_STATUS_RUNNING

    @property
    def is_successful(self) -> bool:
        return self.status in (BUILD_STATUS_SUCCESS, BUILD_STATUS_ABORTED_WITH_SUCCESS)


__all__ = [
    "BUILD_STATUS_ABORTED",
    "BUILD_STATUS_ABORTED_WITH_SUCCESS",
    "BUILD_STATUS_FAILED",
    "BUILD_STATUS_RUNNING",
    "BUILD_STATUS_SUCCESS",
    "ModelBuildStatus",
    "ModelBuildTriggerResponse",
]
