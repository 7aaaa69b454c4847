# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Bitrise REST API client.

Covers the three calls a trigger run needs:

- ``GET  /v0.1/apps/{app-slug}``: app details (known repository URL)
- ``POST /v0.1/apps/{app-slug}/builds``: trigger a build
- ``GET  /v0.1/apps/{app-slug}/builds/{build-slug}``: build status (listen mode)

Builds are never retried: a trigger request that timed out may still have
started a build.

Example:
    ```python
    with BitriseClient(token=token) as client:
        app = client.get_app_details(app_slug)
        response = client.trigger_build(app_slug, options, triggered_by="octocat")
        print(response.build_url)
    ```
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from bitrise_trigger.config.model_trigger_settings import DEFAULT_BITRISE_API_URL
from bitrise_trigger.errors import TriggerError
from bitrise_trigger.models.model_app_details import ModelAppDetails
from bitrise_trigger.models.model_bitrise_responses import (
    ModelBuildStatus,
    ModelBuildTriggerResponse,
)
from bitrise_trigger.models.model_build_options import ModelBuildOptions

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0
_HOOK_INFO = {"type": "bitrise"}

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class BitriseClientError(TriggerError):
    """Base exception for Bitrise API errors."""


class BitriseConnectionError(BitriseClientError):
    """Raised when the Bitrise API cannot be reached."""


class BitriseTimeoutError(BitriseClientError):
    """Raised when a request or a listen wait times out."""


class BitriseAPIError(BitriseClientError):
    """Raised on a non-success HTTP status or an unexpected response body.

    Attributes:
        status_code: HTTP status, None when the body was malformed.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BitriseClient:
    """Synchronous Bitrise API client.

    Supports both context manager and manual lifecycle management.

    Args:
        token: Bitrise personal access token (sent as ``Authorization``).
        base_url: API base URL.
        timeout_seconds: Per-request timeout.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        sleep: Sleep function used between listen polls.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BITRISE_API_URL,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={
                "Authorization": token,
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    def close(self) -> None:
        """Close the connection pool. Safe to call multiple times."""
        self._client.close()

    def __enter__(self) -> BitriseClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def get_app_details(self, app_slug: str) -> ModelAppDetails:
        """Fetch the app, including its repository URL.

        Raises:
            BitriseClientError: On any API failure.
        """
        body = self._request("GET", f"/v0.1/apps/{app_slug}")
        return self._parse(ModelAppDetails, body.get("data"), "app details")

    def trigger_build(
        self,
        app_slug: str,
        options: ModelBuildOptions,
        triggered_by: str,
    ) -> ModelBuildTriggerResponse:
        """Start a build with the resolved options.

        Raises:
            BitriseClientError: On any API failure.
        """
        payload = {
            "hook_info": _HOOK_INFO,
            "build_params": options.to_build_params(),
            "triggered_by": triggered_by,
        }
        body = self._request("POST", f"/v0.1/apps/{app_slug}/builds", json=payload)
        response = self._parse(ModelBuildTriggerResponse, body, "build trigger")
        logger.info(
            "Triggered build #%s (%s): %s",
            response.build_number,
            response.triggered_workflow or options.workflow_id or options.pipeline_id,
            response.build_url,
        )
        return response

    def get_build(self, app_slug: str, build_slug: str) -> ModelBuildStatus:
        body = self._request("GET", f"/v0.1/apps/{app_slug}/builds/{build_slug}")
        return self._parse(ModelBuildStatus, body.get("data"), "build status")

    def wait_for_build(
        self,
        app_slug: str,
        build_slug: str,
        poll_interval_seconds: float,
        timeout_seconds: float,
    ) -> ModelBuildStatus:
        """Poll the build until it finishes.

        Raises:
            BitriseTimeoutError: If the build is still running after
                ``timeout_seconds``.
            BitriseClientError: On any API failure.
        """
        waited = 0.0
        while True:
            status = self.get_build(app_slug, build_slug)
            if status.is_finished:
                logger.info(
                    "Build %s finished: %s", build_slug, status.status_text or status.status
                )
                return status
            if waited >= timeout_seconds:
                raise BitriseTimeoutError(
                    f"Build {build_slug} still running after {timeout_seconds:.0f}s"
                )
            logger.debug("Build %s is running, next poll in %ss", build_slug, poll_interval_seconds)
            self._sleep(poll_interval_seconds)
            waited += poll_interval_seconds

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise BitriseTimeoutError(f"Bitrise API {method} {path} timed out: {exc}") from exc
        except httpx.ConnectError as exc:
            raise BitriseConnectionError(
                f"Connection failed to {self._base_url}: {exc}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise BitriseAPIError(
                f"Bitrise API {method} {path} returned "
                f"{exc.response.status_code}: {exc.response.text[:200]}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise BitriseClientError(f"Bitrise API {method} {path} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise BitriseAPIError(
                f"Bitrise API {method} {path} returned invalid JSON",
                status_code=response.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise BitriseAPIError(
                f"Bitrise API {method} {path} returned an unexpected body",
                status_code=response.status_code,
            )
        return body

    def _parse(self, model: type[_ModelT], data: Any, what: str) -> _ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise BitriseAPIError(f"Unexpected {what} response: {exc}") from exc


__all__ = [
    "BitriseAPIError",
    "BitriseClient",
    "BitriseClientError",
    "BitriseConnectionError",
    "BitriseTimeoutError",
]
