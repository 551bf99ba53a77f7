from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from score_engine.config.runtime import get_settings
from score_engine.db.init_db import migrate
from score_engine.services.score_calculator import calculate_match_score, check_profile
from score_engine.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _load_definition(path: str) -> Any:
    """Accept a bare definition document or a profile record wrapping one."""
    payload = _load_json(path)
    if isinstance(payload, dict) and isinstance(payload.get("definition"), dict):
        return payload["definition"]
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="score-engine", description="Score profile evaluation CLI")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command")

    evaluate_parser = subparsers.add_parser("evaluate", help="Score one match side against a profile")
    evaluate_parser.add_argument("--profile", required=True, help="Score profile JSON file")
    evaluate_parser.add_argument("--input", required=True, help="Score input JSON file ('-' for stdin)")

    check_parser = subparsers.add_parser("check", help="Report problems in a score profile")
    check_parser.add_argument("--profile", required=True, help="Score profile JSON file")

    subparsers.add_parser("migrate", help="Create or upgrade the score profile tables")

    return parser


def run_evaluate(profile_path: str, input_path: str) -> int:
    result = calculate_match_score(_load_definition(profile_path), _load_json(input_path))
    print(json.dumps(result.to_payload(), indent=2, sort_keys=True))
    return 0 if result.success else 1


def run_check(profile_path: str) -> int:
    problems = check_profile(_load_definition(profile_path))
    if not problems:
        print("check passed: profile is valid")
        return 0
    print(f"check failed: {len(problems)} problem(s)")
    for problem in problems:
        print(f"- {problem}")
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level or get_settings().log_level)

    try:
        if args.command == "evaluate":
            return run_evaluate(args.profile, args.input)
        if args.command == "check":
            return run_check(args.profile)
        if args.command == "migrate":
            migrate()
            return 0
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("could not read input: %s", exc)
        return 2

    parser.print_help()
    return 1


def entrypoint() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entrypoint()
