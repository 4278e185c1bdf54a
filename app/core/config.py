"""Application configuration using Pydantic settings."""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, cast

from pydantic import BeforeValidator, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import ConfigError
from app.models.policy import (
    DEFAULT_SERVICE_NAME,
    MAX_HSTS_MAX_AGE,
    SecurityPolicy,
)

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


class AppConfig(BaseSettings):
    """Application configuration."""

    # Server configuration
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    workers: int = Field(default=1, alias="WORKERS")
    debug: bool = Field(default=False, alias="DEBUG")
    service_name: str = Field(
        default=DEFAULT_SERVICE_NAME,
        alias="SERVICE_NAME",
        description="Reported by /health and used as the default Server header",
    )

    # Logging configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        alias="LOG_FORMAT",
    )
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_file: str | None = Field(default=None, alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> AppConfig:
    """Get cached application settings."""
    return AppConfig()


def _parse_max_age(value: object) -> object:
    if isinstance(value, str):
        if not _DIGITS.fullmatch(value):
            raise ValueError("expected a non-negative integer")
        if int(value) > MAX_HSTS_MAX_AGE:
            raise ValueError(f"must not exceed {MAX_HSTS_MAX_AGE}")
        return int(value)
    return value


def _parse_flag(value: object) -> object:
    if isinstance(value, str):
        if value not in ("true", "false"):
            raise ValueError("expected 'true' or 'false'")
        return value == "true"
    return value


MaxAge = Annotated[int | None, BeforeValidator(_parse_max_age)]
Flag = Annotated[bool | None, BeforeValidator(_parse_flag)]


class SecurityOverrides(BaseSettings):
    """Security policy values supplied through the environment.

    ``None`` means "not set": the built-in default is kept. Empty variables are
    treated as unset.
    """

    content_type_options: str | None = Field(
        default=None, alias="SECURITY_CONTENT_TYPE_OPTIONS"
    )
    frame_options: str | None = Field(default=None, alias="SECURITY_FRAME_OPTIONS")
    xss_protection: str | None = Field(default=None, alias="SECURITY_XSS_PROTECTION")
    hsts_max_age: MaxAge = Field(default=None, alias="SECURITY_HSTS_MAX_AGE")
    hsts_include_subdomains: Flag = Field(
        default=None, alias="SECURITY_HSTS_INCLUDE_SUBDOMAINS"
    )
    hsts_preload: Flag = Field(default=None, alias="SECURITY_HSTS_PRELOAD")
    csp_default_src: str | None = Field(default=None, alias="SECURITY_CSP_DEFAULT_SRC")
    csp_script_src: str | None = Field(default=None, alias="SECURITY_CSP_SCRIPT_SRC")
    csp_style_src: str | None = Field(default=None, alias="SECURITY_CSP_STYLE_SRC")
    referrer_policy: str | None = Field(
        default=None, alias="SECURITY_REFERRER_POLICY"
    )
    permissions_policy: str | None = Field(
        default=None, alias="SECURITY_PERMISSIONS_POLICY"
    )
    server_header: str | None = Field(default=None, alias="SERVER_HEADER")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )


# (override field, policy section or None for top level, policy field), applied
# in this order. Only three CSP directives can be overridden.
_OVERRIDE_TARGETS: tuple[tuple[str, str | None, str], ...] = (
    ("content_type_options", None, "content_type_options"),
    ("frame_options", None, "frame_options"),
    ("xss_protection", None, "xss_protection"),
    ("hsts_max_age", "hsts", "max_age_seconds"),
    ("hsts_include_subdomains", "hsts", "include_subdomains"),
    ("hsts_preload", "hsts", "preload"),
    ("csp_default_src", "csp", "default"),
    ("csp_script_src", "csp", "script"),
    ("csp_style_src", "csp", "style"),
    ("referrer_policy", None, "referrer_policy"),
    ("permissions_policy", None, "permissions_policy"),
    ("server_header", None, "server_identity"),
)


@dataclass(frozen=True)
class PolicyResolution:
    """Outcome of resolving the security policy from the environment."""

    policy: SecurityPolicy | None
    errors: tuple[ConfigError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> SecurityPolicy:
        """Return the policy or raise the first configuration error."""
        if self.errors:
            raise self.errors[0]
        return cast(SecurityPolicy, self.policy)


def _variable_name(loc: tuple) -> str:
    key = str(loc[0]) if loc else ""
    field = SecurityOverrides.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key.upper()


def _to_config_errors(exc: ValidationError) -> tuple[ConfigError, ...]:
    errors = []
    for error in exc.errors():
        reason = error["msg"].removeprefix("Value error, ")
        errors.append(
            ConfigError(_variable_name(error["loc"]), str(error["input"]), reason)
        )
    return tuple(errors)


def apply_overrides(
    policy: SecurityPolicy, overrides: SecurityOverrides
) -> SecurityPolicy:
    """Return ``policy`` with every set override replacing its field."""
    updates: dict[str | None, dict[str, object]] = {None: {}, "hsts": {}, "csp": {}}
    for source, section, target in _OVERRIDE_TARGETS:
        value = getattr(overrides, source)
        if value is not None:
            updates[section][target] = value

    top_level = dict(updates[None])
    if updates["hsts"]:
        top_level["hsts"] = policy.hsts.model_copy(update=updates["hsts"])
    if updates["csp"]:
        top_level["csp"] = policy.csp.model_copy(update=updates["csp"])
    return policy.model_copy(update=top_level)


def resolve_policy(settings: AppConfig | None = None) -> PolicyResolution:
    """Build the security policy from defaults and environment overrides.

    Parse failures are collected rather than raised; see
    :meth:`PolicyResolution.unwrap`.
    """
    settings = settings or get_settings()
    defaults = SecurityPolicy.defaults(server_identity=settings.service_name)
    try:
        overrides = SecurityOverrides()
    except ValidationError as exc:
        return PolicyResolution(policy=None, errors=_to_config_errors(exc))
    return PolicyResolution(policy=apply_overrides(defaults, overrides))


def load_policy(settings: AppConfig | None = None) -> SecurityPolicy:
    """Resolve the security policy, raising :class:`ConfigError` on bad input."""
    resolution = resolve_policy(settings)
    for error in resolution.errors:
        logger.error("Security configuration error: %s", error)
    return resolution.unwrap()
