"""Top-level synchronous client for the Jira Service Desk REST API."""

from __future__ import annotations

import httpx

from .config import DEFAULT_TIMEOUT, ClientConfig
from .request import Dispatcher
from .security import validate_host
from .services import InfoService, RequestService, ServiceDeskService


class ServiceDeskClient:
    """Entry point holding the host and credentials shared by all facades.

    The host is joined with ``rest/servicedeskapi/`` verbatim, so it should
    end with a slash, e.g. ``https://jira.example.com/``. Arguments left out
    are read from ``JIRA_SERVICEDESK_HOST``, ``JIRA_SERVICEDESK_USERNAME``
    and ``JIRA_SERVICEDESK_PASSWORD``.
    """

    def __init__(
        self,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        allow_http: bool = False,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = ClientConfig.from_env(
            host=host,
            username=username,
            password=password,
            timeout=timeout,
            allow_http=allow_http,
        )
        if self.config.host:
            validate_host(self.config.host, allow_http=allow_http)
        self._dispatcher = Dispatcher(self.config, http_client=http_client)
        self._info = InfoService(self._dispatcher)
        self._request = RequestService(self._dispatcher)
        self._servicedesk = ServiceDeskService(self._dispatcher)

    def __enter__(self) -> "ServiceDeskClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._dispatcher.close()

    @property
    def info(self) -> InfoService:
        return self._info

    @property
    def request(self) -> RequestService:
        return self._request

    @property
    def servicedesk(self) -> ServiceDeskService:
        return self._servicedesk

    def set_host(self, host: str) -> "ServiceDeskClient":
        validate_host(host, allow_http=self.config.allow_http)
        self.config.host = host
        return self

    def set_username(self, username: str) -> "ServiceDeskClient":
        self.config.username = username
        return self

    def set_password(self, password: str) -> "ServiceDeskClient":
        self.config.password = password
        return self
