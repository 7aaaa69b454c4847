# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Trigger Bitrise builds from GitHub Actions events.

This package implements:
- Event context models for push, tag and pull request events
- Build-option resolution (overrides, pull requests, plain events)
- Repository URL selection and identity checks
- Action input settings and event loading
- A Bitrise API client and the ``python -m bitrise_trigger`` entry point
"""

from bitrise_trigger.errors import ConfigError, TriggerError
from bitrise_trigger.resolver.resolver_build_options import (
    ResolverBuildOptions,
    resolve_build_options,
)

__all__ = [
    "ConfigError",
    "ResolverBuildOptions",
    "TriggerError",
    "resolve_build_options",
]
