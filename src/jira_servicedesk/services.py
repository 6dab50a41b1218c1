"""Resource facades for the Service Desk REST API.

Every method maps to exactly one endpoint and returns the raw
:class:`~jira_servicedesk.request.Response`. Optional query parameters left
as ``None`` are omitted from the request.
"""

from __future__ import annotations

import os
from typing import IO, Any, Mapping, Sequence, Union

from .models import AttachmentModel, CommentInput, ParticipantsInput, RequestModel
from .request import Dispatcher, HttpMethod, MultipartPart, RequestBuilder, Response

DEFAULT_PAGE_SIZE = 50

FileSource = Union[str, "os.PathLike[str]", IO[bytes]]


class _BaseService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def _request(self, method: HttpMethod, path: str) -> RequestBuilder:
        return self._dispatcher.new_request().set_method(method).set_path(path)


class InfoService(_BaseService):
    def get(self) -> Response:
        """Return version and build information about the Service Desk instance."""
        return self._request(HttpMethod.GET, "info").dispatch()


class RequestService(_BaseService):
    """Customer requests, their comments, participants, SLAs and attachments."""

    def create_customer_request(self, request: RequestModel | Mapping[str, Any]) -> Response:
        """Create a customer request.

        The service desk and request type are required, together with whatever
        fields the request type marks mandatory (see
        ``ServiceDeskService.get_request_type_fields``).
        """
        return self._request(HttpMethod.POST, "request").set_body(request).dispatch()

    def get_my_customer_requests(
        self,
        search_term: str | None = None,
        request_ownership: str | None = None,
        request_status: str | None = None,
        service_desk_id: int | str | None = None,
        request_type_id: int | str | None = None,
        expand: str | Sequence[str] | None = None,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        """Return the requests the current user created or participates in.

        Results are ordered by latest activity.
        """
        if isinstance(expand, (list, tuple)):
            expand = ",".join(expand)
        query = {
            "searchTerm": search_term,
            "requestOwnership": request_ownership,
            "requestStatus": request_status,
            "serviceDeskId": service_desk_id,
            "requestTypeId": request_type_id,
            "expand": expand,
            "start": start,
            "limit": limit,
        }
        return self._request(HttpMethod.GET, "request").set_query(query).dispatch()

    def get_customer_request_by_id_or_key(self, issue_id_or_key: str, expand: str | None = None) -> Response:
        path = f"request/{issue_id_or_key}"
        if expand:
            path = f"{path}/{expand}"
        return self._request(HttpMethod.GET, path).dispatch()

    def create_request_comment(self, issue_id_or_key: str, comment: str, public: bool = False) -> Response:
        """Add a public or internal comment authored by the current user."""
        body = CommentInput(body=comment, public=public)
        return self._request(HttpMethod.POST, f"request/{issue_id_or_key}/comment").set_body(body).dispatch()

    def get_request_comments(
        self,
        issue_id_or_key: str,
        public: bool | None = None,
        internal: bool | None = None,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        query = {"public": public, "internal": internal, "start": start, "limit": limit}
        return self._request(HttpMethod.GET, f"request/{issue_id_or_key}/comment").set_query(query).dispatch()

    def get_request_comment_by_id(self, issue_id_or_key: str, comment_id: int | str) -> Response:
        return self._request(HttpMethod.GET, f"request/{issue_id_or_key}/comment/{comment_id}").dispatch()

    def get_request_participants(
        self,
        issue_id_or_key: str,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        query = {"start": start, "limit": limit}
        return self._request(HttpMethod.GET, f"request/{issue_id_or_key}/participant").set_query(query).dispatch()

    def add_request_participants(self, issue_id_or_key: str, usernames: Sequence[str]) -> Response:
        body = ParticipantsInput(usernames=list(usernames))
        return self._request(HttpMethod.POST, f"request/{issue_id_or_key}/participant").set_body(body).dispatch()

    def remove_request_participants(self, issue_id_or_key: str, usernames: Sequence[str]) -> Response:
        body = ParticipantsInput(usernames=list(usernames))
        return self._request(HttpMethod.DELETE, f"request/{issue_id_or_key}/participant").set_body(body).dispatch()

    def get_sla_information(
        self,
        issue_id_or_key: str,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        """Return SLA values for a request. Agents only."""
        query = {"start": start, "limit": limit}
        return self._request(HttpMethod.GET, f"request/{issue_id_or_key}/sla").set_query(query).dispatch()

    def get_sla_information_by_id(self, issue_id_or_key: str, sla_metric_id: int | str) -> Response:
        return self._request(HttpMethod.GET, f"request/{issue_id_or_key}/sla/{sla_metric_id}").dispatch()

    def create_attachment(self, issue_id_or_key: str, attachment: AttachmentModel | Mapping[str, Any]) -> Response:
        """Turn temporary attachments (see ``attach_temporary_file``) into permanent ones."""
        return (
            self._request(HttpMethod.POST, f"request/{issue_id_or_key}/attachment")
            .set_body(attachment)
            .mark_experimental()
            .dispatch()
        )


class ServiceDeskService(_BaseService):
    def get_service_desks(self, start: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Response:
        return self._request(HttpMethod.GET, "servicedesk").set_query({"start": start, "limit": limit}).dispatch()

    def get_service_desk_by_id(self, service_desk_id: int | str) -> Response:
        return self._request(HttpMethod.GET, f"servicedesk/{service_desk_id}").dispatch()

    def get_request_types(
        self,
        service_desk_id: int | str,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        query = {"start": start, "limit": limit}
        return self._request(HttpMethod.GET, f"servicedesk/{service_desk_id}/requesttype").set_query(query).dispatch()

    def get_request_type_by_id(self, service_desk_id: int | str, request_type_id: int | str) -> Response:
        return self._request(
            HttpMethod.GET,
            f"servicedesk/{service_desk_id}/requesttype/{request_type_id}",
        ).dispatch()

    def get_request_type_fields(self, service_desk_id: int | str, request_type_id: int | str) -> Response:
        """Return the fields needed to raise a request of this type.

        The payload also reports ``canRaiseOnBehalfOf`` and
        ``canAddRequestParticipants`` for the current user.
        """
        return self._request(
            HttpMethod.GET,
            f"servicedesk/{service_desk_id}/requesttype/{request_type_id}/field",
        ).dispatch()

    def get_queues(
        self,
        service_desk_id: int | str,
        include_count: bool | None = None,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        query = {"includeCount": include_count, "start": start, "limit": limit}
        return (
            self._request(HttpMethod.GET, f"servicedesk/{service_desk_id}/queue")
            .set_query(query)
            .mark_experimental()
            .dispatch()
        )

    def get_issues_in_queue(
        self,
        service_desk_id: int | str,
        queue_id: int | str,
        start: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Response:
        query = {"start": start, "limit": limit}
        return (
            self._request(HttpMethod.GET, f"servicedesk/{service_desk_id}/queue/{queue_id}/issue")
            .set_query(query)
            .mark_experimental()
            .dispatch()
        )

    def attach_temporary_file(self, service_desk_id: int | str, file: FileSource) -> Response:
        """Upload a file as a temporary attachment.

        ``file`` is either a path, opened and closed here, or an open binary
        stream, which is left open. The server requires the part to be named
        ``file`` and rejects the upload without ``X-Atlassian-Token: no-check``.
        """
        if isinstance(file, (str, os.PathLike)):
            with open(file, "rb") as handle:
                return self._attach(service_desk_id, handle)
        return self._attach(service_desk_id, file)

    def _attach(self, service_desk_id: int | str, stream: IO[bytes]) -> Response:
        return (
            self._request(HttpMethod.POST, f"servicedesk/{service_desk_id}/attachTemporaryFile")
            .set_headers({"X-Atlassian-Token": "no-check"})
            .set_multipart([MultipartPart(name="file", contents=stream)])
            .mark_experimental()
            .dispatch()
        )
