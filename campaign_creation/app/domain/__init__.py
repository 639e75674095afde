"""
Campaign creation domain: draft model, lifecycle states, business rules and state machine.
"""

from .draft import CampaignDraft, MediaAsset, MediaType, TimeSlot, empty_draft
from .machine import (
    CampaignEvent,
    PublishEvent,
    StartCreationEvent,
    SystemErrorEvent,
    UpdateDraftEvent,
    ValidateEvent,
    ValidationResultEvent,
    transition,
)
from .rules import validate_campaign_draft
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
    ValidationError,
    ValidationErrorCode,
    current_draft,
)
from .validation import (
    CampaignValidationResult,
    ConflictResult,
    InvalidResult,
    ValidResult,
    build_validation_result,
)

__all__ = [
    'CampaignCreationState',
    'CampaignDraft',
    'CampaignEvent',
    'CampaignValidationResult',
    'ConflictDetectedState',
    'ConflictResult',
    'EditingState',
    'ErrorState',
    'IdleState',
    'InvalidResult',
    'InvalidState',
    'MediaAsset',
    'MediaType',
    'PublishEvent',
    'PublishedState',
    'ReadyToPublishState',
    'StartCreationEvent',
    'SystemErrorEvent',
    'SystemErrorInfo',
    'TimeSlot',
    'UpdateDraftEvent',
    'ValidResult',
    'ValidateEvent',
    'ValidatingState',
    'ValidationError',
    'ValidationErrorCode',
    'ValidationResultEvent',
    'build_validation_result',
    'current_draft',
    'empty_draft',
    'transition',
    'validate_campaign_draft',
]
