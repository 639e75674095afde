"""Exceptions raised outside the pure domain functions."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError


class ContractIssue(BaseModel):
    """A single violation of the boundary input contract.

    Attributes:
        path: JSON path of the offending value ('$' for whole-object checks).
        message: Human readable description.
        type: Machine readable error type.
    """

    path: str
    message: str
    type: str


def _json_path(loc: tuple[int | str, ...]) -> str:
    path = '$'
    for part in loc:
        path += f'[{part}]' if isinstance(part, int) else f'.{part}'
    return path


class CampaignContractError(ValueError):
    """External input was rejected by the admission gate before becoming a draft.

    Every violated field is listed, not only the first.
    """

    def __init__(self, issues: list[ContractIssue]) -> None:
        self.issues = issues
        summary = '; '.join(f'{issue.path}: {issue.message}' for issue in issues)
        super().__init__(f'Campaign draft rejected with {len(issues)} issue(s): {summary}')

    @classmethod
    def from_validation_error(cls, exc: PydanticValidationError) -> CampaignContractError:
        issues = [
            ContractIssue(
                path=_json_path(tuple(error['loc'])),
                message=error['msg'].removeprefix('Value error, '),
                type=error['type'],
            )
            for error in exc.errors(include_url=False)
        ]
        return cls(issues)


class SessionNotFoundError(LookupError):
    """No campaign creation session is registered under the given id."""

    def __init__(self, session_id: UUID) -> None:
        self.session_id = session_id
        super().__init__(f'Campaign creation session not found: {session_id}')


class SessionLimitError(RuntimeError):
    """The registry is full and none of its sessions has reached a terminal state."""

    def __init__(self, max_sessions: int) -> None:
        self.max_sessions = max_sessions
        super().__init__(f'Campaign creation session limit reached ({max_sessions} open sessions)')
