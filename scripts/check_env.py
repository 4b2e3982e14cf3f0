"""Utility for verifying the analyzer's environment configuration.

The tool loads ``AppSettings`` from the given ``.env`` file so a missing
``GEMINI_API_KEY`` or a malformed numeric setting is reported before the API
starts answering requests with model errors.

Example usages::

    # Fail with a non-zero exit code when required settings are missing.
    python -m scripts.check_env check --env-file /srv/report-analyzer/.env

    # Print the effective configuration with the API key masked.
    python -m scripts.check_env show --env-file /srv/report-analyzer/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from report_analyzer.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings, letting values already exported in the shell win."""
    _load_env_file(str(env_file))
    return AppSettings(_env_file=env_file)  # type: ignore[call-arg]


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)
    return f"{'*' * (len(secret) - 4)}{secret[-4:]}"


def _show_settings(settings: AppSettings) -> int:
    gemini = settings.gemini
    rows = {
        "environment": settings.environment,
        "log_level": settings.log_level,
        "session_ttl_seconds": settings.session_ttl_seconds,
        "gemini.api_key": _mask(gemini.api_key),
        "gemini.analysis_model_name": gemini.analysis_model_name,
        "gemini.chat_model_name": gemini.chat_model_name,
        "gemini.analysis_temperature": gemini.analysis_temperature,
        "gemini.analysis_max_output_tokens": gemini.analysis_max_output_tokens,
        "gemini.chat_temperature": gemini.chat_temperature,
        "gemini.chat_max_output_tokens": gemini.chat_max_output_tokens,
        "gemini.analysis_system_prompt": (
            "custom" if gemini.analysis_system_prompt else "built-in"
        ),
        "gemini.chat_system_prompt": "custom" if gemini.chat_system_prompt else "built-in",
        "storage.stats_url_template": settings.storage.stats_url_template,
        "storage.fetch_timeout_seconds": settings.storage.fetch_timeout_seconds,
    }
    width = max(len(key) for key in rows)
    for key, value in rows.items():
        print(f"{key.ljust(width)}  {value}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the analyzer settings loaded from a .env file."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("check", "Validate settings and report problems."),
        ("show", "Validate settings and print the effective configuration."),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
        )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    if args.command == "show":
        return _show_settings(settings)
    print("Environment configuration OK.")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
