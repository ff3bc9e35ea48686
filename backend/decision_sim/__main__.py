"""Launcher — validates configuration, then serves the simulator with uvicorn.

Invariants:
    - A missing API key is reported and the process exits with status 1
      before the server starts
    - --prompt-key (used by the exported bundle) asks for the key interactively
      only when it is not already configured
"""

import argparse
import getpass
import logging
import os
import sys

import uvicorn

from decision_sim.config import get_settings
from decision_sim.core.errors import ConfigurationError
from decision_sim.infrastructure.observability import setup_logging

logger = logging.getLogger("decision_sim")

_KEY_PROMPT = (
    "이 시뮬레이터를 실행하려면 Anthropic API 키가 필요합니다.\n\nAPI 키를 입력해주세요: "
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="decision_sim")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--prompt-key", action="store_true",
        help="ask for ANTHROPIC_API_KEY when it is not set",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.prompt_key and not os.environ.get("ANTHROPIC_API_KEY"):
        os.environ["ANTHROPIC_API_KEY"] = getpass.getpass(_KEY_PROMPT)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        setup_logging("INFO", "text")
        logger.critical(e.message, extra={"error_code": e.code})
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run("decision_sim.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
