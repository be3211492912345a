"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. The only free-form mapping is ``settings``,
which holds the values injected into configuration markers.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from tern.errors import ConfigurationError

ENVIRONMENTS = frozenset({"development", "test", "production"})

ONE_YEAR = 60 * 60 * 24 * 365

_SETTING_PREFIX = "TERN_SETTING_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            root="dist",
            environment="production",
            settings={"api_endpoint": "https://api.example.com"},
        )
    """

    # Content
    root: str | Path = "public"
    environment: str = "development"
    settings: Mapping[str, str] = field(default_factory=dict)
    max_age: int = ONE_YEAR

    # Reload (development mode)
    reload: bool = False
    reload_interval: float = 1.0

    # Pipeline
    mobile_redirect_url: str | None = None
    mobile_user_agents: str = r"Mobile|webOS"
    hsts_max_age: int = ONE_YEAR
    cache_max_entries: int = 1024
    compression_min_size: int = 0

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 0  # 0 = auto-detect from CPU count (production only)
    log_level: str = "info"

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    def __post_init__(self) -> None:
        if self.environment not in ENVIRONMENTS:
            allowed = ", ".join(sorted(ENVIRONMENTS))
            msg = f"Unknown environment {self.environment!r}. Expected one of: {allowed}"
            raise ConfigurationError(msg)
        if self.max_age < 0:
            msg = f"max_age must be non-negative, got {self.max_age}"
            raise ConfigurationError(msg)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from ``TERN_*`` environment variables.

        ``TERN_SETTING_<NAME>`` entries become marker settings: the key
        is ``<NAME>`` lowercased, with ``__`` standing in for ``.``
        (``TERN_SETTING_PUSHER__KEY`` → ``pusher.key``).
        """
        env = os.environ if environ is None else environ
        environment = env.get("TERN_ENV") or env.get("RACK_ENV") or "development"

        settings = {
            name[len(_SETTING_PREFIX) :].lower().replace("__", "."): value
            for name, value in env.items()
            if name.startswith(_SETTING_PREFIX) and len(name) > len(_SETTING_PREFIX)
        }

        try:
            port = int(env.get("TERN_PORT") or env.get("PORT") or 8000)
            workers = int(env.get("TERN_WORKERS") or 0)
        except ValueError as exc:
            msg = f"Invalid numeric setting in environment: {exc}"
            raise ConfigurationError(msg) from exc

        return cls(
            root=env.get("TERN_ROOT", "public"),
            environment=environment,
            settings=settings,
            reload=environment == "development",
            mobile_redirect_url=env.get("TERN_MOBILE_REDIRECT_URL") or None,
            host=env.get("TERN_HOST", "127.0.0.1"),
            port=port,
            workers=workers,
            log_level=env.get("TERN_LOG_LEVEL", "info"),
        )
