"""
Pydantic models that represent a campaign draft.

A draft is the unpersisted working data of a campaign being authored. The models only pin down
its shape; business rules (non-blank name, ordered dates, ...) are checked by the rule validator,
so a draft may hold values the rules will later reject.
"""

import re
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CLOCK_TIME_REGEX = re.compile(r'([0-9]{2}):([0-9]{2})')


class DomainModel(BaseModel):
    """Immutable value type shared by all domain models.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MediaType(str, Enum):
    """Media types a campaign may broadcast."""

    IMAGE = 'image'
    VIDEO = 'video'


# Draft
# ----------------------------------------------------------------------------


class TimeSlot(DomainModel):
    """Daily broadcast window.

    Attributes:
        start_time: HH:mm, 24-hour clock.
        end_time: HH:mm, 24-hour clock.
    """

    start_time: str
    end_time: str


class MediaAsset(DomainModel):
    """Creative attached to the campaign.

    Attributes:
        url: Location of the asset.
        type: One of the MediaType values. Kept as plain text so drafts built outside the
            admission gate can still be inspected by the rule validator.
        size_in_mb: Asset size, must not exceed 50.
    """

    url: str
    type: str
    size_in_mb: float


class CampaignDraft(DomainModel):
    """Working data of a campaign being authored.

    Attributes:
        name: Campaign name, must not be blank.
        start_date: ISO 8601 timestamp.
        end_date: ISO 8601 timestamp, strictly after start_date.
        screen_ids: Screens the campaign is shown on, at least one.
        time_slots: Daily broadcast windows, in caller order.
        media_asset: The creative to broadcast.
    """

    name: str
    start_date: str
    end_date: str
    screen_ids: tuple[str, ...]
    time_slots: Annotated[tuple[TimeSlot, ...], Field(default_factory=tuple)]
    media_asset: MediaAsset


def empty_draft() -> CampaignDraft:
    """Draft a new campaign starts from: blank fields and a single placeholder screen."""
    return CampaignDraft(
        name='',
        start_date='',
        end_date='',
        screen_ids=('',),
        time_slots=(),
        media_asset=MediaAsset(url='', type=MediaType.IMAGE.value, size_in_mb=0),
    )


# Parsing helpers
# ----------------------------------------------------------------------------


def parse_iso_timestamp(value: str) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None if it cannot be parsed.

    Timestamps without an offset are read as UTC so that any two parsed values compare.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_clock_time(value: str) -> int | None:
    """Parse an HH:mm string into minutes since midnight, or None if malformed."""
    match = _CLOCK_TIME_REGEX.fullmatch(value)
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes
