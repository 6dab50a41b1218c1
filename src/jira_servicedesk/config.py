"""Connection settings shared by every facade of a client."""

from __future__ import annotations

import os
from dataclasses import dataclass

HOST_ENV_VAR = "JIRA_SERVICEDESK_HOST"
USERNAME_ENV_VAR = "JIRA_SERVICEDESK_USERNAME"
PASSWORD_ENV_VAR = "JIRA_SERVICEDESK_PASSWORD"

DEFAULT_TIMEOUT = 30.0


@dataclass
class ClientConfig:
    host: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    allow_http: bool = False

    @classmethod
    def from_env(
        cls,
        *,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        allow_http: bool = False,
    ) -> "ClientConfig":
        """Build a config where explicit arguments win over the environment."""
        return cls(
            host=host or os.getenv(HOST_ENV_VAR),
            username=username or os.getenv(USERNAME_ENV_VAR),
            password=password or os.getenv(PASSWORD_ENV_VAR),
            timeout=timeout,
            allow_http=allow_http,
        )
