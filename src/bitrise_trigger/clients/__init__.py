# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""HTTP clients for the Bitrise API.

Resolution never imports these; the CLI wires a client in after options
are resolved.
"""

from __future__ import annotations

from bitrise_trigger.clients.client_bitrise import (
    BitriseAPIError,
    BitriseClient,
    BitriseClientError,
    BitriseConnectionError,
    BitriseTimeoutError,
)

__all__ = [
    "BitriseAPIError",
    "BitriseClient",
    "BitriseClientError",
    "BitriseConnectionError",
    "BitriseTimeoutError",
]
