"""
Admission gate for external campaign data.

Untrusted input (a request body, a batch file row, ...) is checked here against the structural
contract before it becomes a CampaignDraft. The rule validator still re-checks the semantic
invariants afterwards; the two layers are allowed to diverge over time.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Self

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.exceptions import CampaignContractError
from ..domain.draft import (
    CampaignDraft,
    MediaAsset,
    MediaType,
    TimeSlot,
    parse_clock_time,
    parse_iso_timestamp,
)
from ..domain.rules import MAX_MEDIA_SIZE_MB
from ..utils.validation import validate_schema

CLOCK_TIME_PATTERN = r'^([01][0-9]|2[0-3]):[0-5][0-9]$'

_ISO_DATETIME_PREFIX = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}')
_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _check_iso_timestamp(value: str) -> str:
    if _ISO_DATETIME_PREFIX.match(value) is None:
        msg = 'must be an ISO 8601 date-time'
        raise ValueError(msg)
    try:
        datetime.fromisoformat(value)
    except ValueError as err:
        msg = 'must be a valid ISO 8601 date-time'
        raise ValueError(msg) from err
    return value


def _check_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError as err:
        msg = 'must be a valid URL'
        raise ValueError(msg) from err
    return value


IsoTimestamp = Annotated[
    str, AfterValidator(_check_iso_timestamp), Field(json_schema_extra={'format': 'date-time'})
]
ClockTime = Annotated[str, Field(pattern=CLOCK_TIME_PATTERN)]
UrlText = Annotated[str, AfterValidator(_check_url), Field(json_schema_extra={'format': 'uri'})]


class ContractModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSlotInput(ContractModel):
    """Daily broadcast window, HH:mm on a 24-hour clock."""

    start_time: ClockTime
    end_time: ClockTime

    @model_validator(mode='after')
    def _check_order(self) -> Self:
        if parse_clock_time(self.start_time) >= parse_clock_time(self.end_time):
            msg = 'startTime must be before endTime'
            raise ValueError(msg)
        return self


class MediaAssetInput(ContractModel):
    """Creative attached to the campaign."""

    url: UrlText
    type: MediaType
    size_in_mb: Annotated[float, Field(le=MAX_MEDIA_SIZE_MB, strict=True, allow_inf_nan=False)]


class CampaignDraftInput(ContractModel):
    """Boundary contract mirroring CampaignDraft field for field.

    Field-level problems are all reported together. The date ordering check runs once every
    field is well formed.
    """

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    start_date: IsoTimestamp
    end_date: IsoTimestamp
    screen_ids: Annotated[list[str], Field(min_length=1)]
    time_slots: list[TimeSlotInput]
    media_asset: MediaAssetInput

    @field_validator('time_slots')
    @classmethod
    def _check_overlaps(cls, slots: list[TimeSlotInput]) -> list[TimeSlotInput]:
        ordered = sorted(slots, key=lambda slot: parse_clock_time(slot.start_time))
        for current, following in zip(ordered, ordered[1:]):
            if parse_clock_time(current.end_time) > parse_clock_time(following.start_time):
                msg = (
                    f'time slots must not overlap: {current.start_time}-{current.end_time} '
                    f'overlaps with {following.start_time}-{following.end_time}'
                )
                raise ValueError(msg)
        return slots

    @model_validator(mode='after')
    def _check_date_order(self) -> Self:
        if parse_iso_timestamp(self.start_date) >= parse_iso_timestamp(self.end_date):
            msg = 'startDate must be before endDate'
            raise ValueError(msg)
        return self

    def to_draft(self) -> CampaignDraft:
        return CampaignDraft(
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            screen_ids=tuple(self.screen_ids),
            time_slots=tuple(
                TimeSlot(start_time=slot.start_time, end_time=slot.end_time)
                for slot in self.time_slots
            ),
            media_asset=MediaAsset(
                url=self.media_asset.url,
                type=self.media_asset.type.value,
                size_in_mb=self.media_asset.size_in_mb,
            ),
        )


def parse_campaign_draft(data: Any) -> CampaignDraft:
    """Admit external input as a CampaignDraft.

    Raises:
        CampaignContractError: listing every contract violation found in `data`.
    """
    try:
        contract = CampaignDraftInput.model_validate(data)
    except PydanticValidationError as exc:
        raise CampaignContractError.from_validation_error(exc) from exc
    return contract.to_draft()


def contract_json_schema() -> dict[str, Any]:
    """JSON Schema (draft 2020-12) of the boundary input, as published to external callers."""
    schema = CampaignDraftInput.model_json_schema(by_alias=True)
    errors = validate_schema(schema)
    if errors:
        msg = f'Generated contract schema is not valid JSON Schema: {errors}'
        raise RuntimeError(msg)
    return schema
