"""Pydantic models representing the campaign creation lifecycle state."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from .draft import CampaignDraft, DomainModel


class ValidationErrorCode(str, Enum):
    """Closed set of business-rule violations. Extending it is a contract change."""

    EMPTY_NAME = 'EMPTY_NAME'
    INVALID_DATE_RANGE = 'INVALID_DATE_RANGE'
    INVALID_DATE_FORMAT = 'INVALID_DATE_FORMAT'
    OVERLAPPING_TIME_SLOTS = 'OVERLAPPING_TIME_SLOTS'
    EMPTY_SCREEN_SELECTION = 'EMPTY_SCREEN_SELECTION'
    MEDIA_SIZE_EXCEEDS_LIMIT = 'MEDIA_SIZE_EXCEEDS_LIMIT'
    MEDIA_TYPE_NOT_ALLOWED = 'MEDIA_TYPE_NOT_ALLOWED'
    INVALID_TIME_FORMAT = 'INVALID_TIME_FORMAT'


class ValidationError(DomainModel):
    """A violated business rule. Recoverable: the user edits the draft and resubmits.

    This is a data record, not an exception.
    """

    code: ValidationErrorCode
    message: str


class SystemErrorInfo(DomainModel):
    """An unexpected system failure. Terminal for the creation flow."""

    message: str


NonEmptyValidationErrors = Annotated[list[ValidationError], Field(min_length=1)]


# States
# ----------------------------------------------------------------------------


class IdleState(DomainModel):
    """No campaign is being created."""

    status: Literal['idle'] = 'idle'


class EditingState(DomainModel):
    """The user is modifying the draft."""

    status: Literal['editing'] = 'editing'
    draft: CampaignDraft


class ValidatingState(DomainModel):
    """Business rules are being checked against the draft."""

    status: Literal['validating'] = 'validating'
    draft: CampaignDraft


class InvalidState(DomainModel):
    """One or more business rules failed."""

    status: Literal['invalid'] = 'invalid'
    draft: CampaignDraft
    errors: NonEmptyValidationErrors


class ConflictDetectedState(DomainModel):
    """The campaign conflicts with already scheduled campaigns."""

    status: Literal['conflict_detected'] = 'conflict_detected'
    draft: CampaignDraft


class ReadyToPublishState(DomainModel):
    """All rules passed and no conflict was reported."""

    status: Literal['ready_to_publish'] = 'ready_to_publish'
    draft: CampaignDraft


class PublishedState(DomainModel):
    """The campaign was published. Only the server-assigned identifier is kept."""

    status: Literal['published'] = 'published'
    campaign_id: str


class ErrorState(DomainModel):
    """Unexpected system failure."""

    status: Literal['error'] = 'error'
    error: SystemErrorInfo

    @property
    def message(self) -> str:
        return self.error.message


CampaignCreationState = Annotated[
    IdleState
    | EditingState
    | ValidatingState
    | InvalidState
    | ConflictDetectedState
    | ReadyToPublishState
    | PublishedState
    | ErrorState,
    Field(discriminator='status'),
]
"""Exactly one lifecycle state. All variants carry a 'status' field used for parsing."""

DraftCarryingState = (
    EditingState | ValidatingState | InvalidState | ConflictDetectedState | ReadyToPublishState
)

TERMINAL_STATUSES = frozenset({'published', 'error'})

campaign_state_adapter: TypeAdapter[CampaignCreationState] = TypeAdapter(CampaignCreationState)


def current_draft(state: CampaignCreationState) -> CampaignDraft | None:
    """Return the draft carried by the state, or None for idle, published and error."""
    if isinstance(state, DraftCarryingState):
        return state.draft
    return None


def is_terminal(state: CampaignCreationState) -> bool:
    return state.status in TERMINAL_STATUSES
