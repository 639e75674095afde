"""
Business rules for a campaign draft.

Each rule inspects the draft independently and returns zero or more errors. The rules are
pure functions: they never raise for bad draft content, never log and never mutate the draft.
Conflicts with other scheduled campaigns are not one of these rules.
"""

from collections.abc import Callable

from .draft import CampaignDraft, MediaType, TimeSlot, parse_clock_time, parse_iso_timestamp
from .state import ValidationError, ValidationErrorCode

MAX_MEDIA_SIZE_MB = 50
ALLOWED_MEDIA_TYPES = frozenset(media_type.value for media_type in MediaType)


def _error(code: ValidationErrorCode, message: str) -> ValidationError:
    return ValidationError(code=code, message=message)


def _slot_label(slot: TimeSlot) -> str:
    return f'{slot.start_time}-{slot.end_time}'


def validate_name(draft: CampaignDraft) -> list[ValidationError]:
    if not draft.name.strip():
        return [_error(ValidationErrorCode.EMPTY_NAME, 'Campaign name must not be empty.')]
    return []


def validate_date_range(draft: CampaignDraft) -> list[ValidationError]:
    """startDate must parse and come strictly before endDate.

    An unparseable date skips the ordering check.
    """
    start = parse_iso_timestamp(draft.start_date)
    end = parse_iso_timestamp(draft.end_date)

    if start is None or end is None:
        return [
            _error(
                ValidationErrorCode.INVALID_DATE_FORMAT,
                'startDate and endDate must be valid ISO 8601 timestamps.',
            )
        ]
    if start >= end:
        return [_error(ValidationErrorCode.INVALID_DATE_RANGE, 'startDate must be before endDate.')]
    return []


def validate_screen_selection(draft: CampaignDraft) -> list[ValidationError]:
    if len(draft.screen_ids) == 0:
        return [
            _error(
                ValidationErrorCode.EMPTY_SCREEN_SELECTION, 'At least one screen must be selected.'
            )
        ]
    return []


def validate_time_slots(draft: CampaignDraft) -> list[ValidationError]:
    """Every slot must be well formed, and well-formed slots must not overlap.

    One INVALID_TIME_FORMAT is reported per offending slot. Overlap detection only runs once
    every slot is well formed. Slots that touch (end == next start) do not overlap.
    """
    errors: list[ValidationError] = []
    parsed: list[tuple[int, int, TimeSlot]] = []

    for slot in draft.time_slots:
        start = parse_clock_time(slot.start_time)
        end = parse_clock_time(slot.end_time)

        if start is None or end is None:
            errors.append(
                _error(
                    ValidationErrorCode.INVALID_TIME_FORMAT,
                    f'Time slot "{_slot_label(slot)}" contains an invalid HH:mm value.',
                )
            )
            continue
        if start >= end:
            errors.append(
                _error(
                    ValidationErrorCode.INVALID_TIME_FORMAT,
                    f'Time slot startTime "{slot.start_time}" must be before '
                    f'endTime "{slot.end_time}".',
                )
            )
            continue
        parsed.append((start, end, slot))

    if errors:
        return errors

    ordered = sorted(parsed, key=lambda item: item[0])
    for (_, current_end, current), (next_start, _, following) in zip(ordered, ordered[1:]):
        if current_end > next_start:
            errors.append(
                _error(
                    ValidationErrorCode.OVERLAPPING_TIME_SLOTS,
                    f'Time slot "{_slot_label(current)}" overlaps with '
                    f'"{_slot_label(following)}".',
                )
            )
    return errors


def validate_media_asset(draft: CampaignDraft) -> list[ValidationError]:
    """Size limit and type check. Both may fire for the same asset."""
    errors: list[ValidationError] = []
    media_asset = draft.media_asset

    if media_asset.size_in_mb > MAX_MEDIA_SIZE_MB:
        errors.append(
            _error(
                ValidationErrorCode.MEDIA_SIZE_EXCEEDS_LIMIT,
                f'Media asset size {media_asset.size_in_mb} MB exceeds the '
                f'{MAX_MEDIA_SIZE_MB} MB limit.',
            )
        )
    if media_asset.type not in ALLOWED_MEDIA_TYPES:
        errors.append(
            _error(
                ValidationErrorCode.MEDIA_TYPE_NOT_ALLOWED,
                f'Media type "{media_asset.type}" is not allowed. '
                f'Must be one of: {", ".join(sorted(ALLOWED_MEDIA_TYPES))}.',
            )
        )
    return errors


CAMPAIGN_RULES: tuple[Callable[[CampaignDraft], list[ValidationError]], ...] = (
    validate_name,
    validate_date_range,
    validate_screen_selection,
    validate_time_slots,
    validate_media_asset,
)
"""Evaluation order. Errors are reported in this order, never by severity."""


def validate_campaign_draft(draft: CampaignDraft) -> list[ValidationError]:
    """Check every business rule against the draft.

    Returns an empty list when the draft satisfies all rules; that is the only signal that lets
    a draft proceed to ready_to_publish.
    """
    errors: list[ValidationError] = []
    for rule in CAMPAIGN_RULES:
        errors.extend(rule(draft))
    return errors
