# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Route log records to GitHub Actions workflow commands.

Warnings and errors become ``::warning::`` / ``::error::`` lines so the
runner shows them as annotations; debug records use ``::debug::`` and are
only displayed when step debug logging is enabled.
"""

from __future__ import annotations

import logging
import os
import sys

_COMMAND_BY_LEVEL = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
)


def escape_data(message: str) -> str:
    """Escape a workflow command message (``%``, CR and LF)."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsFormatter(logging.Formatter):
    """Formatter emitting workflow commands for WARNING and above.

    INFO records are printed as-is; multi-line INFO output (such as the
    resolved options JSON) stays readable in the job log.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for level, command in _COMMAND_BY_LEVEL:
            if record.levelno >= level:
                return f"::{command}::{escape_data(message)}"
        if record.levelno < logging.INFO:
            return f"::debug::{escape_data(message)}"
        return message


def running_in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def configure_logging(verbose: bool = False) -> None:
    """Install the root handler for CLI runs.

    Inside GitHub Actions records are rendered as workflow commands;
    elsewhere a plain ``level | name | message`` format is used.
    """
    handler = logging.StreamHandler(sys.stdout)
    if running_in_github_actions():
        handler.setFormatter(GitHubActionsFormatter("%(message)s"))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=True,
    )


__all__ = [
    "GitHubActionsFormatter",
    "configure_logging",
    "escape_data",
    "running_in_github_actions",
]
