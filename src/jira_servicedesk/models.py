"""Request payload models for the Service Desk REST API.

Responses are never parsed into these; they only shape outgoing bodies.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceDeskModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RequestModel(ServiceDeskModel):
    """Payload for POST request.

    ``request_field_values`` maps Jira field ids to JSON-ready values.
    """

    service_desk_id: str = Field(alias="serviceDeskId")
    request_type_id: str = Field(alias="requestTypeId")
    request_field_values: dict[str, Any] = Field(default_factory=dict, alias="requestFieldValues")
    raise_on_behalf_of: str | None = Field(default=None, alias="raiseOnBehalfOf")
    request_participants: list[str] | None = Field(default=None, alias="requestParticipants")


class AdditionalComment(ServiceDeskModel):
    body: str


class AttachmentModel(ServiceDeskModel):
    """Payload for POST request/{issueIdOrKey}/attachment."""

    temporary_attachment_ids: list[str] = Field(alias="temporaryAttachmentIds")
    public: bool = True
    additional_comment: AdditionalComment | None = Field(default=None, alias="additionalComment")

    @field_validator("additional_comment", mode="before")
    @classmethod
    def _coerce_comment(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"body": value}
        return value


class CommentInput(ServiceDeskModel):
    body: str
    public: bool = False


class ParticipantsInput(ServiceDeskModel):
    usernames: list[str] = Field(default_factory=list)


def coerce_payload(payload: Any) -> Any:
    """Turn models and mappings into plain JSON-ready structures."""
    if payload is None:
        return None
    if isinstance(payload, ServiceDeskModel):
        return payload.to_payload()
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(payload, Mapping):
        return dict(payload)
    return payload
