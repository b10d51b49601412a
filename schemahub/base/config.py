# ============================================================================
# schemahub/base/config.py
# Application Configuration Management
# ============================================================================
#
# PURPOSE:
# Defines every setting the aggregator reads: where documents are served,
# which credentials unlock the private document, where snapshots are written
# and how logging behaves.
#
# KEY CONCEPTS:
# 1. Frozen dataclasses: one immutable section per concern
# 2. Environment variables: SCHEMAHUB_* overrides (e.g., SCHEMAHUB_ENV=production)
# 3. Singleton: get_config() hands out one shared instance, set_config() swaps it
#
# ============================================================================

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from schemahub.errors import ErrorCode, SchemaHubError

logger = logging.getLogger(__name__)

PRODUCTION = "production"


# ============================================================================
# Document Configuration
# ============================================================================
# Controls the generated OpenAPI documents and the routes serving them.

@dataclass(frozen=True)
class DocsConfig:
    # Prefix mounted in front of /openapi.json and /openapi-private.json
    # "" serves them at the root, "/openapi" gives /openapi/openapi.json
    path: str = ""

    # The single login/password pair accepted on the private document route
    private_login: str = "your-login"
    private_password: str = "your-password"

    # Directory receiving openapi.json / openapi-private.json outside production
    snapshot_dir: Path = field(default_factory=lambda: Path("."))

    # Optional JSON file with an operator schema merged over the template
    overrides_file: Optional[Path] = None

    # Values baked into the template's info/servers blocks
    organization: str = "SchemaHub"
    copyright_since: int = 2017
    terms_url: str = "https://example.com/terms-and-conditions/"
    contact_email: str = "support@example.com"
    contact_url: str = "https://developer.example.com"
    docs_url: str = "https://docs.example.com"
    sandbox_url: str = "https://sandbox.example.com/api"
    production_url: str = "https://api.example.com/api"


# ============================================================================
# HTTP Security Configuration
# ============================================================================

@dataclass(frozen=True)
class SecurityConfig:
    # Origins allowed by the CORS middleware ("*" = any)
    allowed_origins: tuple = ("*",)

    # How long browsers may cache a preflight response (seconds)
    cors_max_age: int = 3600


# ============================================================================
# Logging Configuration
# ============================================================================

@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Rotating log file, disabled unless a path is given
    file_path: Optional[Path] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


# ============================================================================
# Master Configuration Container
# ============================================================================

@dataclass(frozen=True)
class SchemaHubConfig:
    docs: DocsConfig = field(default_factory=DocsConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    log: LogConfig = field(default_factory=LogConfig)

    # "production" turns off snapshot files
    environment: str = "development"
    debug: bool = False

    api_host: str = "127.0.0.1"
    api_port: int = 8765

    # JSON file with service definitions loaded at startup
    services_file: Optional[Path] = None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == PRODUCTION

    @classmethod
    def from_env(cls) -> "SchemaHubConfig":
        overrides = os.getenv("SCHEMAHUB_SCHEMA_OVERRIDES")
        docs = DocsConfig(
            path=os.getenv("SCHEMAHUB_DOCS_PATH", "").rstrip("/"),
            private_login=os.getenv("SCHEMAHUB_DOCS_LOGIN", "your-login"),
            private_password=os.getenv("SCHEMAHUB_DOCS_PASSWORD", "your-password"),
            snapshot_dir=Path(os.getenv("SCHEMAHUB_SNAPSHOT_DIR", ".")),
            overrides_file=Path(overrides) if overrides else None,
            organization=os.getenv("SCHEMAHUB_ORGANIZATION", "SchemaHub"),
            copyright_since=int(os.getenv("SCHEMAHUB_COPYRIGHT_SINCE", "2017")),
            sandbox_url=os.getenv("SCHEMAHUB_SANDBOX_URL", "https://sandbox.example.com/api"),
            production_url=os.getenv("SCHEMAHUB_PRODUCTION_URL", "https://api.example.com/api"),
        )

        # Comma-separated list, e.g. "https://a.example.com,https://b.example.com"
        origins_str = os.getenv("SCHEMAHUB_ALLOWED_ORIGINS", "")
        origins = tuple(o.strip() for o in origins_str.split(",") if o.strip()) or ("*",)
        security = SecurityConfig(
            allowed_origins=origins,
            cors_max_age=int(os.getenv("SCHEMAHUB_CORS_MAX_AGE", "3600")),
        )

        log_file = os.getenv("SCHEMAHUB_LOG_FILE")
        log = LogConfig(
            level=os.getenv("SCHEMAHUB_LOG_LEVEL", "INFO"),
            file_path=Path(log_file) if log_file else None,
        )

        services_file = os.getenv("SCHEMAHUB_SERVICES_FILE")
        return cls(
            docs=docs,
            security=security,
            log=log,
            environment=os.getenv("SCHEMAHUB_ENV", "development"),
            debug=os.getenv("SCHEMAHUB_DEBUG", "false").lower() == "true",
            api_host=os.getenv("SCHEMAHUB_API_HOST", "127.0.0.1"),
            api_port=int(os.getenv("SCHEMAHUB_API_PORT", "8765")),
            services_file=Path(services_file) if services_file else None,
        )


# ============================================================================
# Global Configuration Singleton
# ============================================================================

_config: Optional[SchemaHubConfig] = None


def get_config() -> SchemaHubConfig:
    """
    Get the global configuration instance.

    Returns:
        The shared SchemaHubConfig instance (created from the environment on first use)
    """
    global _config
    if _config is None:
        _config = SchemaHubConfig.from_env()
    return _config


def set_config(config: Optional[SchemaHubConfig]) -> None:
    """
    Replace the global configuration (mainly used for testing).

    Passing None drops the cached instance so the next get_config() rereads
    the environment.
    """
    global _config
    _config = config


def load_overrides(config: Optional[SchemaHubConfig] = None) -> Dict[str, Any]:
    """
    Read the operator override schema named by docs.overrides_file.

    Returns an empty dict when no file is configured.

    Raises:
        SchemaHubError: CONFIG_FILE_NOT_FOUND, CONFIG_PARSE_ERROR or CONFIG_INVALID
    """
    cfg = config or get_config()
    path = cfg.docs.overrides_file
    if path is None:
        return {}

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SchemaHubError(
            ErrorCode.CONFIG_FILE_NOT_FOUND,
            "Schema overrides file not found",
            details={"path": str(path)},
        ) from e
    except json.JSONDecodeError as e:
        raise SchemaHubError(
            ErrorCode.CONFIG_PARSE_ERROR,
            "Schema overrides file is not valid JSON",
            details={"path": str(path), "error": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise SchemaHubError(
            ErrorCode.CONFIG_INVALID,
            "Schema overrides must be a JSON object",
            details={"path": str(path), "type": type(data).__name__},
        )
    logger.info(f"Loaded schema overrides from {path}")
    return data


def setup_logging(config: Optional[SchemaHubConfig] = None) -> None:
    """
    Configure Python's logging system based on our settings.

    Call this once at application startup.
    """
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path is not None:
        from logging.handlers import RotatingFileHandler
        cfg.log.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            cfg.log.file_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    level = "DEBUG" if cfg.debug else cfg.log.level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
