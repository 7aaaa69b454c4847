# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Trigger a Bitrise build from a GitHub Actions job.

Reads the action inputs (``INPUT_*``) and the triggering event
(``GITHUB_*``), resolves the build options and submits them to Bitrise.

Usage:
    python -m bitrise_trigger
    python -m bitrise_trigger --dry-run
    python -m bitrise_trigger --event-path event.json --dry-run --verbose

Exit Codes:
    0 - Success: build triggered (and, when listening, finished successfully)
    1 - Failure: no build can be requested, the Bitrise API failed, or the
        build failed in listen mode
    2 - Error: invalid action inputs
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from bitrise_trigger.clients.client_bitrise import BitriseClient, BitriseClientError
from bitrise_trigger.config.model_trigger_settings import (
    ModelGitHubRuntimeSettings,
    ModelTriggerSettings,
)
from bitrise_trigger.errors import ConfigError
from bitrise_trigger.github.event_loader import load_event_context
from bitrise_trigger.github.workflow_commands import configure_logging
from bitrise_trigger.models.model_app_details import ModelAppDetails
from bitrise_trigger.resolver.actor import resolve_actor_username
from bitrise_trigger.resolver.resolver_build_options import ResolverBuildOptions

logger = logging.getLogger(__name__)

# JSON output indentation (spaces)
JSON_INDENT_SPACES = 2


def _fetch_app_details(client: BitriseClient, app_slug: str) -> ModelAppDetails | None:
    """Look up the app; a failure only loses the override cross-checks."""
    try:
        return client.get_app_details(app_slug)
    except BitriseClientError as exc:
        logger.warning("Could not fetch Bitrise app details for %r: %s", app_slug, exc)
        return None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trigger a Bitrise build for the current GitHub Actions event",
        prog="python -m bitrise_trigger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Inputs are read from INPUT_* environment variables, the event from GITHUB_*.

Examples:
  %(prog)s                              # Resolve and trigger
  %(prog)s --dry-run                    # Print build params only
  %(prog)s --event-path event.json -n   # Resolve a saved event
""",
    )
    parser.add_argument(
        "--event-path",
        metavar="PATH",
        default=None,
        help="Event payload JSON (default: $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print the resolved build params without calling Bitrise",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(args: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (see module docstring).
    """
    parsed_args = _build_parser().parse_args(args)
    configure_logging(verbose=parsed_args.verbose)

    try:
        settings = ModelTriggerSettings()
        runtime = ModelGitHubRuntimeSettings()
    except ValidationError as exc:
        logger.error("Invalid action inputs: %s", exc)
        return 2

    if not parsed_args.dry_run and not settings.can_query_app:
        logger.error("bitrise-token and bitrise-app-slug are required to trigger a build")
        return 2

    overrides = settings.to_overrides()
    if overrides.has_ref_override and not settings.can_query_app:
        logger.warning(
            'It is recommended to use "bitrise-token" and "bitrise-app-slug" '
            "with override options."
        )

    client: BitriseClient | None = None
    if not parsed_args.dry_run and settings.bitrise_token:
        client = BitriseClient(token=settings.bitrise_token, base_url=settings.api_url)

    try:
        context = load_event_context(runtime, event_path=parsed_args.event_path)
        app_details: ModelAppDetails | None = None
        if client is not None and settings.app_slug:
            app_details = _fetch_app_details(client, settings.app_slug)

        options = ResolverBuildOptions().resolve(
            context,
            overrides,
            app_details=app_details,
        )

        if client is None or not settings.app_slug:
            print(json.dumps(options.to_build_params(), indent=JSON_INDENT_SPACES))
            return 0

        response = client.trigger_build(
            settings.app_slug,
            options,
            triggered_by=resolve_actor_username(context),
        )
        if not settings.listen:
            return 0

        status = client.wait_for_build(
            settings.app_slug,
            response.build_slug,
            poll_interval_seconds=settings.listen_poll_interval_seconds,
            timeout_seconds=settings.listen_timeout_seconds,
        )
        if not status.is_successful:
            logger.error(
                "Bitrise build %s did not succeed: %s",
                response.build_url or response.build_slug,
                status.status_text or status.status,
            )
            return 1
        return 0

    except ConfigError as exc:
        logger.error("%s", exc.message)
        return 1
    except BitriseClientError as exc:
        logger.error("Bitrise API request failed: %s", exc.message)
        return 1
    finally:
        if client is not None:
            client.close()


if __name__ == "__main__":
    sys.exit(main())
