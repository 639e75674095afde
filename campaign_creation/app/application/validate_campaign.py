"""Validate use case: runs the business rules and drives the state machine to the outcome."""

from ..domain.machine import ValidateEvent, ValidationResultEvent, transition
from ..domain.rules import validate_campaign_draft
from ..domain.state import CampaignCreationState, EditingState, ValidatingState
from ..domain.validation import build_validation_result


def validate_campaign(state: CampaignCreationState) -> CampaignCreationState:
    """Validate the draft of an editing state.

    editing -> validating -> invalid | ready_to_publish. Any other state is returned unchanged.
    The rule validator never reports conflicts, so conflict_detected is not produced here.
    """
    if not isinstance(state, EditingState):
        return state

    validating = transition(state, ValidateEvent())
    if not isinstance(validating, ValidatingState):
        return state

    errors = validate_campaign_draft(validating.draft)
    result = build_validation_result(errors)
    return transition(validating, ValidationResultEvent(result=result))
