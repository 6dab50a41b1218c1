"""Endpoints covered by the client, keyed the way OpenAPI documents name them."""

from __future__ import annotations

API_ROOT = "/rest/servicedeskapi"

ENDPOINT_COVERAGE: dict[str, str] = {
    f"GET {API_ROOT}/info": "info.get",
    f"POST {API_ROOT}/request": "request.create_customer_request",
    f"GET {API_ROOT}/request": "request.get_my_customer_requests",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}": "request.get_customer_request_by_id_or_key",
    f"POST {API_ROOT}/request/{{issueIdOrKey}}/comment": "request.create_request_comment",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}/comment": "request.get_request_comments",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}/comment/{{commentId}}": "request.get_request_comment_by_id",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}/participant": "request.get_request_participants",
    f"POST {API_ROOT}/request/{{issueIdOrKey}}/participant": "request.add_request_participants",
    f"DELETE {API_ROOT}/request/{{issueIdOrKey}}/participant": "request.remove_request_participants",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}/sla": "request.get_sla_information",
    f"GET {API_ROOT}/request/{{issueIdOrKey}}/sla/{{slaMetricId}}": "request.get_sla_information_by_id",
    f"POST {API_ROOT}/request/{{issueIdOrKey}}/attachment": "request.create_attachment",
    f"GET {API_ROOT}/servicedesk": "servicedesk.get_service_desks",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}": "servicedesk.get_service_desk_by_id",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}/requesttype": "servicedesk.get_request_types",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}/requesttype/{{requestTypeId}}": "servicedesk.get_request_type_by_id",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}/requesttype/{{requestTypeId}}/field": "servicedesk.get_request_type_fields",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}/queue": "servicedesk.get_queues",
    f"GET {API_ROOT}/servicedesk/{{serviceDeskId}}/queue/{{queueId}}/issue": "servicedesk.get_issues_in_queue",
    f"POST {API_ROOT}/servicedesk/{{serviceDeskId}}/attachTemporaryFile": "servicedesk.attach_temporary_file",
}
