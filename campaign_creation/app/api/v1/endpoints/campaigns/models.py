"""Request and response bodies of the campaign endpoints."""

from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .....core.exceptions import ContractIssue
from .....domain.state import CampaignCreationState, ValidationError


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionResponse(ApiModel):
    """Current lifecycle state of a campaign creation session."""

    session_id: UUID
    transitioned: bool
    """False if the last operation did not apply to the state it was sent to. This is not an error."""
    state: CampaignCreationState


class PublishRequest(ApiModel):
    campaign_id: Annotated[str, Field(min_length=1)]
    """Identifier assigned to the campaign by the publication service."""


class DraftValidationResponse(ApiModel):
    """Business-rule validation of a draft outside of any session."""

    valid: bool
    errors: list[ValidationError]


class ContractErrorResponse(ApiModel):
    detail: list[ContractIssue]
