"""
Campaign creation state machine.

`transition` is total: every (state, event) pair yields a state. Pairs that are not part of the
lifecycle return the input state itself, unchanged; callers treat that as a normal outcome.

    idle              -> editing           (START_CREATION)
    editing           -> editing           (UPDATE_DRAFT)
    editing           -> validating        (VALIDATE)
    validating        -> invalid           (VALIDATION_RESULT invalid)
    validating        -> conflict_detected (VALIDATION_RESULT conflict)
    validating        -> ready_to_publish  (VALIDATION_RESULT valid)
    invalid           -> editing           (UPDATE_DRAFT)
    conflict_detected -> editing           (UPDATE_DRAFT)
    ready_to_publish  -> published         (PUBLISH)
    any               -> error             (SYSTEM_ERROR)
"""

from typing import Annotated, Literal, assert_never

from pydantic import Field

from .draft import CampaignDraft, DomainModel, empty_draft
from .state import (
    CampaignCreationState,
    ConflictDetectedState,
    EditingState,
    ErrorState,
    IdleState,
    InvalidState,
    PublishedState,
    ReadyToPublishState,
    SystemErrorInfo,
    ValidatingState,
)
from .validation import CampaignValidationResult, ConflictResult, InvalidResult, ValidResult

# Events
# ----------------------------------------------------------------------------


class StartCreationEvent(DomainModel):
    """The user begins a new campaign."""

    type: Literal['START_CREATION'] = 'START_CREATION'


class UpdateDraftEvent(DomainModel):
    """The draft was edited. The whole draft is replaced; merging partial edits is up to the caller."""

    type: Literal['UPDATE_DRAFT'] = 'UPDATE_DRAFT'
    draft: CampaignDraft


class ValidateEvent(DomainModel):
    """Business-rule validation is requested."""

    type: Literal['VALIDATE'] = 'VALIDATE'


class ValidationResultEvent(DomainModel):
    """The validation step finished. Only the validate use case should emit this."""

    type: Literal['VALIDATION_RESULT'] = 'VALIDATION_RESULT'
    result: CampaignValidationResult


class PublishEvent(DomainModel):
    """The validated campaign was published under a server-assigned identifier."""

    type: Literal['PUBLISH'] = 'PUBLISH'
    campaign_id: str


class SystemErrorEvent(DomainModel):
    """An unexpected system failure. Applies from every state."""

    type: Literal['SYSTEM_ERROR'] = 'SYSTEM_ERROR'
    error: SystemErrorInfo


CampaignEvent = Annotated[
    StartCreationEvent
    | UpdateDraftEvent
    | ValidateEvent
    | ValidationResultEvent
    | PublishEvent
    | SystemErrorEvent,
    Field(discriminator='type'),
]
"""All event types have a field named 'type' which can be used for parsing."""


# Transition function
# ----------------------------------------------------------------------------


def _apply_validation_result(
    state: ValidatingState, result: CampaignValidationResult
) -> CampaignCreationState:
    if isinstance(result, InvalidResult):
        return InvalidState(draft=state.draft, errors=result.errors)
    if isinstance(result, ConflictResult):
        return ConflictDetectedState(draft=state.draft)
    if isinstance(result, ValidResult):
        return ReadyToPublishState(draft=state.draft)
    assert_never(result)


def transition(state: CampaignCreationState, event: CampaignEvent) -> CampaignCreationState:
    """Compute the successor of `state` under `event`.

    Pure: never mutates its inputs and never raises for an inapplicable event.
    """
    # SYSTEM_ERROR preempts every per-state rule, terminal states included.
    if isinstance(event, SystemErrorEvent):
        return ErrorState(error=event.error)

    if isinstance(state, IdleState):
        if isinstance(event, StartCreationEvent):
            return EditingState(draft=empty_draft())
        return state

    if isinstance(state, EditingState):
        if isinstance(event, UpdateDraftEvent):
            return EditingState(draft=event.draft)
        if isinstance(event, ValidateEvent):
            return ValidatingState(draft=state.draft)
        return state

    if isinstance(state, ValidatingState):
        if isinstance(event, ValidationResultEvent):
            return _apply_validation_result(state, event.result)
        return state

    if isinstance(state, InvalidState | ConflictDetectedState):
        if isinstance(event, UpdateDraftEvent):
            return EditingState(draft=event.draft)
        return state

    if isinstance(state, ReadyToPublishState):
        if isinstance(event, PublishEvent):
            return PublishedState(campaign_id=event.campaign_id)
        return state

    if isinstance(state, PublishedState | ErrorState):
        return state

    assert_never(state)
