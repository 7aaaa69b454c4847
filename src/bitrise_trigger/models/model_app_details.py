# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Known Bitrise app metadata, used to cross-check overrides."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelAppDetails(BaseModel):
    """The ``data`` object of ``GET /v0.1/apps/{app-slug}``.

    Only ``repo_url`` takes part in resolution: it seeds overrides with a
    repository and gates the collapse of an override back to the event.
    """

    slug: str | None = Field(default=None, description="Bitrise app slug")
    title: str | None = Field(default=None, description="App title")
    repo_url: str | None = Field(default=None, description="Repository URL of the app")
    repo_owner: str | None = Field(default=None, description="Repository owner")
    project_type: str | None = Field(default=None, description="Project type")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


__all__ = ["ModelAppDetails"]
