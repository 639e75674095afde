"""Outcome of a single validation cycle, carried from validating to its successor state."""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import Field

from .draft import DomainModel
from .state import NonEmptyValidationErrors, ValidationError


class InvalidResult(DomainModel):
    """At least one business rule failed."""

    type: Literal['invalid'] = 'invalid'
    errors: NonEmptyValidationErrors


class ConflictResult(DomainModel):
    """The draft conflicts with other scheduled campaigns.

    Nothing produces this yet: cross-campaign conflict detection is an external collaborator
    that has not been built.
    """

    type: Literal['conflict'] = 'conflict'


class ValidResult(DomainModel):
    """Every business rule is satisfied."""

    type: Literal['valid'] = 'valid'


CampaignValidationResult = Annotated[
    InvalidResult | ConflictResult | ValidResult,
    Field(discriminator='type'),
]


def build_validation_result(
    errors: Sequence[ValidationError],
) -> InvalidResult | ValidResult:
    """Summarize the rule validator output.

    An empty error list is the only way to obtain a valid result.
    """
    if not errors:
        return ValidResult()
    first, *rest = errors
    return InvalidResult(errors=[first, *rest])
