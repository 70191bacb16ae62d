"""
Draftly entry point.

This file handles startup concerns (arg-parsing, logging) and runs one completion against
OpenRouter: either a short project name for a prompt, or a free-form answer.
"""

import argparse
import asyncio
import logging
import sys

from draftly.actions import generate_project_name
from draftly.config import settings
from draftly.core.client import generate_text
from draftly.core.errors import CompletionError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stderr,
    )
    # Request lines from httpx are noise at info level
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser for ``draftly``."""
    parser = argparse.ArgumentParser(description="Run a completion against OpenRouter")
    parser.add_argument(
        "mode",
        choices=["name", "ask"],
        type=str.lower,
        help="'name' suggests a short project name, 'ask' returns the model's answer",
    )
    parser.add_argument("prompt", help="Prompt sent to the model")
    parser.add_argument(
        "--model",
        default=settings.DEFAULT_MODEL,
        help="OpenRouter model id (default from env: %(default)s)",
    )
    parser.add_argument("--system", default=None, help="Optional system prompt for 'ask'")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )
    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Draftly command line.

    Returns the process exit code: 0 on success, 1 if the completion failed.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)

    # Override log level setting with command-line argument
    settings.LOG_LEVEL = args.log_level
    _init_logging(settings.LOG_LEVEL)

    logger.info("Running '%s' with model %s", args.mode, args.model)

    if args.mode == "name":
        name = asyncio.run(generate_project_name(args.prompt, model=args.model))
        print(name)
        return 0

    try:
        result = asyncio.run(generate_text(args.model, args.prompt, system=args.system))
    except CompletionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
