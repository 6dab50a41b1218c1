from __future__ import annotations

import base64
import json
import logging

import httpx
import pytest

from jira_servicedesk.config import ClientConfig
from jira_servicedesk.exceptions import (
    ServiceDeskNetworkError,
    ServiceDeskTimeoutError,
    ServiceDeskValidationError,
)
from jira_servicedesk.request import (
    Dispatcher,
    HttpMethod,
    MultipartPart,
    PendingRequest,
    build_query,
)
from jira_servicedesk.security import sanitize_headers, validate_host

HOST = "https://jira.example.com/"


def _dispatcher(handler, **config) -> Dispatcher:
    settings = {"host": HOST, "username": "agent", "password": "secret", **config}
    return Dispatcher(
        ClientConfig(**settings),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={}, request=request)


def test_build_query_drops_absent_values_and_keeps_order() -> None:
    query = build_query({"searchTerm": None, "public": False, "start": 0, "limit": 10, "expand": None})
    assert query == (("public", "false"), ("start", "0"), ("limit", "10"))


def test_build_query_repeats_key_for_sequences() -> None:
    assert build_query({"usernames": ["a", None, "b"]}) == (("usernames", "a"), ("usernames", "b"))


def test_build_query_drops_empty_strings_and_sequences() -> None:
    query = build_query({"searchTerm": "", "expand": [], "usernames": ["", "a"], "limit": 0})
    assert query == (("usernames", "a"), ("limit", "0"))


def test_set_path_does_not_escape_ids() -> None:
    pending = _dispatcher(_ok).new_request().set_method("GET").set_path("request/SD 1/x").build()
    assert pending.url == "https://jira.example.com/rest/servicedeskapi/request/SD 1/x"


def test_set_path_resolves_against_host_and_prefix() -> None:
    dispatcher = _dispatcher(_ok)
    first = dispatcher.new_request().set_method("GET").set_path("request/SD-1").build()
    second = dispatcher.new_request().set_method("GET").set_path("request/SD-1").build()

    assert first.url == "https://jira.example.com/rest/servicedeskapi/request/SD-1"
    assert first.url == second.url


def test_full_url_encodes_query() -> None:
    pending = (
        _dispatcher(_ok)
        .new_request()
        .set_method(HttpMethod.GET)
        .set_path("request")
        .set_query({"searchTerm": "vpn & wifi", "start": 0, "limit": 10})
        .build()
    )
    assert pending.full_url == (
        "https://jira.example.com/rest/servicedeskapi/request?searchTerm=vpn+%26+wifi&start=0&limit=10"
    )


def test_set_method_rejects_unknown_method() -> None:
    with pytest.raises(ServiceDeskValidationError, match="Unsupported HTTP method"):
        _dispatcher(_ok).new_request().set_method("PATCH")


def test_set_method_accepts_lowercase() -> None:
    pending = _dispatcher(_ok).new_request().set_method("delete").set_path("info").build()
    assert pending.method is HttpMethod.DELETE


def test_build_requires_method() -> None:
    with pytest.raises(ServiceDeskValidationError, match="method is not set"):
        _dispatcher(_ok).new_request().set_path("info").build()


def test_build_requires_path() -> None:
    with pytest.raises(ServiceDeskValidationError, match="path is not set"):
        _dispatcher(_ok).new_request().set_method("GET").dispatch()


def test_set_path_requires_host() -> None:
    with pytest.raises(ServiceDeskValidationError, match="host is not configured"):
        _dispatcher(_ok, host=None).new_request().set_path("info")


def test_body_and_multipart_are_exclusive() -> None:
    builder = (
        _dispatcher(_ok)
        .new_request()
        .set_method("POST")
        .set_path("servicedesk/1/attachTemporaryFile")
        .set_body({"a": 1})
        .set_multipart([{"name": "file", "contents": b"data"}])
    )
    with pytest.raises(ServiceDeskValidationError, match="multipart"):
        builder.build()


def test_pending_request_validates_on_construction() -> None:
    with pytest.raises(ServiceDeskValidationError):
        PendingRequest(method="OPTIONS", url="https://jira.example.com/rest/servicedeskapi/info")
    with pytest.raises(ServiceDeskValidationError):
        PendingRequest(method=HttpMethod.GET, url="")


def test_multipart_part_requires_name_and_contents() -> None:
    with pytest.raises(ServiceDeskValidationError):
        MultipartPart.coerce({"name": "file"})


def test_experimental_header_sent_exactly_once() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={}, request=request)

    (
        _dispatcher(handler)
        .new_request()
        .set_method("GET")
        .set_path("servicedesk/1/queue")
        .set_headers({"x-experimentalapi": "opt-in", "X-Trace": "1", "Accept-Language": "en"})
        .mark_experimental()
        .mark_experimental()
        .dispatch()
    )

    assert len(seen) == 1
    assert seen[0].headers.get_list("X-ExperimentalApi") == ["opt-in"]
    assert seen[0].headers["X-Trace"] == "1"


def test_dispatch_sends_one_call_with_configuration() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "10"}, request=request)

    response = (
        _dispatcher(handler)
        .new_request()
        .set_method("POST")
        .set_path("request/SD-1/comment")
        .set_body({"body": "hello", "public": True})
        .set_headers({"X-Atlassian-Token": "no-check"})
        .dispatch()
    )

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://jira.example.com/rest/servicedeskapi/request/SD-1/comment"
    assert request.headers["X-Atlassian-Token"] == "no-check"
    assert json.loads(request.content.decode()) == {"body": "hello", "public": True}
    expected = base64.b64encode(b"agent:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert response.status_code == 201
    assert response.json() == {"id": "10"}


def test_raw_bytes_body_is_sent_verbatim() -> None:
    seen: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.content)
        return httpx.Response(204, request=request)

    _dispatcher(handler).new_request().set_method("PUT").set_path("request/SD-1").set_body(b"\x00raw").dispatch()

    assert seen == [b"\x00raw"]


def test_str_body_is_sent_raw_not_json_encoded() -> None:
    seen: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.content)
        return httpx.Response(204, request=request)

    _dispatcher(handler).new_request().set_method("POST").set_path("request").set_body("plain text").dispatch()

    assert seen == [b"plain text"]


def test_unset_credentials_are_sent_empty() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(401, request=request)

    response = _dispatcher(handler, username=None, password=None).new_request().set_method("GET").set_path("info").dispatch()

    assert seen[0].headers["Authorization"] == "Basic " + base64.b64encode(b":").decode()
    assert response.status_code == 401


def test_non_success_status_is_returned_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"errorMessage": "Request does not exist"}, request=request)

    response = _dispatcher(handler).new_request().set_method("GET").set_path("request/SD-404").dispatch()

    assert response.status_code == 404
    assert not response.is_success
    assert response.json() == {"errorMessage": "Request does not exist"}
    assert response.body == response.raw.content


def test_connection_refused_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(ServiceDeskNetworkError) as excinfo:
        _dispatcher(handler).new_request().set_method("GET").set_path("info").dispatch()

    assert not isinstance(excinfo.value, ServiceDeskTimeoutError)
    assert isinstance(excinfo.value.cause, httpx.ConnectError)


def test_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ServiceDeskTimeoutError) as excinfo:
        _dispatcher(handler, timeout=2.5).new_request().set_method("GET").set_path("info").dispatch()

    assert excinfo.value.timeout == 2.5


def test_dispatch_logs_method_and_url(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="jira_servicedesk.request")

    _dispatcher(_ok).new_request().set_method("GET").set_path("info").dispatch()

    messages = [record.getMessage() for record in caplog.records]
    assert any("GET https://jira.example.com/rest/servicedeskapi/info" in message for message in messages)
    assert any("-> 200" in message for message in messages)


def test_sanitize_headers_redacts_credentials() -> None:
    headers = sanitize_headers({"Authorization": "Basic abc", "X-Atlassian-Token": "no-check"})
    assert headers == {"Authorization": "[REDACTED]", "X-Atlassian-Token": "no-check"}


@pytest.mark.parametrize(
    ("url", "allow_http"),
    [
        ("jira.example.com/", False),
        ("ftp://jira.example.com/", False),
        ("http://jira.example.com/", False),
    ],
)
def test_validate_host_rejects_bad_hosts(url: str, allow_http: bool) -> None:
    with pytest.raises(ServiceDeskValidationError):
        validate_host(url, allow_http=allow_http)


def test_validate_host_allows_plain_http_when_enabled() -> None:
    validate_host("http://jira.internal/", allow_http=True)
    validate_host("http://localhost:8080/")
