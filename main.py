"""
main.py — Shim Agent Entry Point

Usage:
    python main.py                              # interactive CLI
    python main.py --session-id my-session      # fixed session id
    python main.py --config other.yaml --log-level DEBUG

The API key is read from GOOGLE_API_KEY (or GEMINI_API_KEY), typically
via a .env file next to this script.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import NoReturn

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from config.settings import LOG_LEVELS, ConfigError, Settings, load_settings
from observability.logger import get_logger, setup_logging

load_dotenv(dotenv_path=Path(__file__).parent / ".env")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shim-agent",
        description="Conversational agent with goals, task planning and local tools",
    )
    parser.add_argument("--config", help="config.yaml path (default: $SHIM_CONFIG, then config/config.yaml)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="override logging.level")
    parser.add_argument("--session-id", help="session id (default: demo-session-<epoch ms>)")
    return parser.parse_args(argv)


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def bootstrap(args: argparse.Namespace) -> Settings:
    """
    Load and validate settings, then configure logging.

    Any config problem is printed to stderr and ends the process with
    exit code 1 before anything else starts.
    """
    try:
        settings = load_settings(args.config)
    except ValidationError as exc:
        lines = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc']) or '?'}: {err['msg']}"
            for err in exc.errors()
        )
        _fail(f"Invalid configuration:\n{lines}")
    except (OSError, yaml.YAMLError, ConfigError) as exc:
        _fail(f"Could not load configuration: {exc}")

    try:
        settings.validate_all()
    except ConfigError as exc:
        _fail(str(exc))

    log_kwargs = settings.logging_kwargs()
    if args.log_level:
        log_kwargs["level"] = args.log_level
    setup_logging(**log_kwargs)
    return settings


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = bootstrap(args)
    session_id = args.session_id or f"demo-session-{int(time.time() * 1000)}"

    get_logger("shim_agent.main").info(
        "shim_agent.starting",
        model=settings.llm.model,
        session_id=session_id,
        web_search_live=settings.tools.web_search.live,
    )

    from interfaces.cli import run_cli
    run_cli(settings, session_id=session_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
