# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Repository URL selection and identity.

Equivalence rules of ``urls_refer_to_same_repo``: two URLs name the same
repository when their ``owner/name`` path components match after
normalization. Normalization

- accepts ``https://``, ``http://``, ``ssh://``, ``git://`` URLs and the
  scp-like ``user@host:owner/name`` form;
- ignores the scheme and host (including host casing);
- lowercases owner and name (GitHub names are case-insensitive);
- drops a trailing ``.git`` suffix and trailing slashes;
- ignores path segments after the name (``/tree/<branch>`` and similar).

A URL without an owner/name pair never matches anything, not even itself.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from bitrise_trigger.models.model_event_context import ModelRepository

# user@host:owner/name(.git) - no scheme, colon before the path
_SCP_LIKE_PATTERN = re.compile(r"^(?:[^@/\s]+@)?(?P<host>[^:/\s]+):(?P<path>[^/].*)$")
_GIT_SUFFIX = ".git"


def select_repository_url(repo: ModelRepository | None) -> str | None:
    """Pick the clone URL Bitrise should use for ``repo``.

    Private repositories need SSH access, public ones are cloned over HTTPS.
    """
    if repo is None:
        return None
    if repo.private:
        return repo.ssh_url
    return repo.clone_url


def normalize_repository_url(url: str | None) -> str | None:
    """Reduce a repository URL to a lowercased ``owner/name`` key.

    Args:
        url: Any supported repository URL form.

    Returns:
        ``owner/name``, or None when the URL has no owner/name pair.
    """
    if not url:
        return None
    url = url.strip()

    if "://" in url:
        path = urlparse(url).path
    else:
        match = _SCP_LIKE_PATTERN.match(url)
        if match is None:
            return None
        path = match.group("path")

    segments = [segment for segment in path.split("/") if segment]
    if len(segments) < 2:
        return None

    owner, name = segments[0], segments[1]
    if name.lower().endswith(_GIT_SUFFIX):
        name = name[: -len(_GIT_SUFFIX)]
    if not name:
        return None
    return f"{owner}/{name}".lower()


def urls_refer_to_same_repo(url_a: str | None, url_b: str | None) -> bool:
    """Return True if both URLs name the same remote repository."""
    key_a = normalize_repository_url(url_a)
    if key_a is None:
        return False
    return key_a == normalize_repository_url(url_b)


__all__ = [
    "normalize_repository_url",
    "select_repository_url",
    "urls_refer_to_same_repo",
]
