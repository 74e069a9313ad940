"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from crontabls.parser.validator import DEFAULT_DIAGNOSTIC_SOURCE


class Settings(BaseSettings):
    """Configuration for the crontab language server and REST API.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"
    diagnostic_source: str = DEFAULT_DIAGNOSTIC_SOURCE

    # Language server
    lsp_transport: Literal["stdio", "tcp", "ws"] = "stdio"
    lsp_server_host: str = "127.0.0.1"
    lsp_server_port: int = 2087

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # platform-injected PORT; takes precedence over api_server_port

    @property
    def effective_port(self) -> int:
        """Return the API port to listen on (injected PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port
