"""Shared argument → AppConfig resolution for tern subcommands."""

import argparse
import dataclasses
import logging
from collections.abc import Mapping

from tern.config import AppConfig
from tern.errors import ConfigurationError


def parse_settings(pairs: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings. Keys may contain dots."""
    settings: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Invalid --set value {pair!r}, expected KEY=VALUE"
            raise ConfigurationError(msg)
        settings[key] = value
    return settings


def resolve_config(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Environment variables first, command-line flags on top."""
    base = AppConfig.from_environ(environ)
    environment = args.env or base.environment
    overrides: dict[str, object] = {
        "environment": environment,
        "settings": {**base.settings, **parse_settings(args.settings)},
        "reload": environment == "development" and not getattr(args, "no_reload", False),
    }
    if args.root:
        overrides["root"] = args.root
    if args.log_level:
        overrides["log_level"] = args.log_level
    for name in ("host", "port", "workers"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return dataclasses.replace(base, **overrides)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
