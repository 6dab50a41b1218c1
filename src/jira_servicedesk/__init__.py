"""Synchronous client for the Jira Service Desk REST API."""

from .client import ServiceDeskClient
from .config import ClientConfig
from .exceptions import (
    ServiceDeskError,
    ServiceDeskNetworkError,
    ServiceDeskTimeoutError,
    ServiceDeskValidationError,
)
from .models import AttachmentModel, RequestModel
from .request import (
    API_PREFIX,
    Dispatcher,
    HttpMethod,
    MultipartPart,
    PendingRequest,
    RequestBuilder,
    Response,
)
from .services import InfoService, RequestService, ServiceDeskService

__all__ = [
    "API_PREFIX",
    "AttachmentModel",
    "ClientConfig",
    "Dispatcher",
    "HttpMethod",
    "InfoService",
    "MultipartPart",
    "PendingRequest",
    "RequestBuilder",
    "RequestModel",
    "RequestService",
    "Response",
    "ServiceDeskClient",
    "ServiceDeskError",
    "ServiceDeskNetworkError",
    "ServiceDeskService",
    "ServiceDeskTimeoutError",
    "ServiceDeskValidationError",
]

__version__ = "0.1.0"
