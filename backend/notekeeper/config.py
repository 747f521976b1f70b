"""
NoteKeeper Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development-friendly defaults. Production deployments
    must at least turn on SESSION_COOKIE_SECURE and narrow CORS_ORIGINS.
    """

    # ── Deployment ────────────────────────────────────────────────────────
    environment: str = Field(
        default="development",
        description="Deployment environment: development or production",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalizes and checks the environment name."""
        lower = v.lower()
        if lower not in {"development", "production"}:
            raise ValueError(
                f"Invalid environment '{v}'. Must be 'development' or 'production'"
            )
        return lower

    # ── Sessions ──────────────────────────────────────────────────────────
    # Cookie carrying the opaque session token between sign-in and sign-out
    session_cookie_name: str = Field(default="token", min_length=1)

    # Secure cookies are only sent over HTTPS; off by default for local http
    session_cookie_secure: bool = Field(default=False)

    session_cookie_samesite: str = Field(default="lax")

    @field_validator("session_cookie_samesite")
    @classmethod
    def validate_samesite(cls, v: str) -> str:
        """Ensures the SameSite attribute is one browsers understand."""
        lower = v.lower()
        valid = {"lax", "strict", "none"}
        if lower not in valid:
            raise ValueError(f"Invalid session_cookie_samesite '{v}'. Must be one of: {valid}")
        return lower

    # ── Credentials ───────────────────────────────────────────────────────
    # PBKDF2-HMAC-SHA256 work factor for stored passwords
    password_hash_iterations: int = Field(default=100_000, ge=1_000, le=2_000_000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; credentials are allowed so "*" is not usable here
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window on sign-up and sign-in only
    auth_rate_limit_requests: int = Field(default=20, ge=1, le=10000)
    auth_rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Tracing ───────────────────────────────────────────────────────────
    # OpenTelemetry server spans per request; console export prints them
    tracing_enabled: bool = Field(default=True)
    tracing_service_name: str = Field(default="notekeeper", min_length=1)
    tracing_console_export: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_for_production(self) -> None:
        """
        What:  Checks that the cookie settings are safe for the environment.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if self.is_production and not self.session_cookie_secure:
            errors.append(
                "SESSION_COOKIE_SECURE must be true in production "
                "(session tokens would otherwise travel over plain HTTP)"
            )
        if self.session_cookie_samesite == "none" and not self.session_cookie_secure:
            errors.append(
                "SESSION_COOKIE_SAMESITE=none requires SESSION_COOKIE_SECURE=true; "
                "browsers reject the cookie otherwise"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
