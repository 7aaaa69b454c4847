# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Build-option resolution: event + overrides -> Bitrise build options."""

from bitrise_trigger.resolver.actor import resolve_actor_username
from bitrise_trigger.resolver.environment import (
    parse_env_var_names,
    prepare_environments,
)
from bitrise_trigger.resolver.repository_url import (
    normalize_repository_url,
    select_repository_url,
    urls_refer_to_same_repo,
)
from bitrise_trigger.resolver.resolver_build_options import (
    ResolverBuildOptions,
    resolve_build_options,
)

__all__ = [
    "ResolverBuildOptions",
    "normalize_repository_url",
    "parse_env_var_names",
    "prepare_environments",
    "resolve_actor_username",
    "resolve_build_options",
    "select_repository_url",
    "urls_refer_to_same_repo",
]
