from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, NamedTuple

from pydantic import ValidationError as PydanticValidationError

from ..application.validate_campaign import validate_campaign
from ..domain.draft import CampaignDraft
from ..domain.machine import (
    CampaignEvent,
    PublishEvent,
    StartCreationEvent,
    SystemErrorEvent,
    UpdateDraftEvent,
    transition,
)
from ..domain.state import CampaignCreationState, IdleState, SystemErrorInfo, current_draft
from .log_config import logger

_DRAFT_FIELDS = frozenset(CampaignDraft.model_fields)


class SessionSnapshot(NamedTuple):
    state: CampaignCreationState
    transitioned: bool


class CampaignCreationSession:
    """Hold the lifecycle state of one campaign draft and apply events to it one at a time.

    The domain functions are pure and impose no ordering; this class is the caller which
    serializes transitions for a single logical draft.
    """

    def __init__(
        self,
        session_id: uuid.UUID | None = None,
        state: CampaignCreationState | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4()
        self._lock = threading.RLock()
        self._state: CampaignCreationState = state if state is not None else IdleState()
        self._last_transition_applied = False
        self._log = logger.bind(session_id=str(self.session_id))

    @property
    def state(self) -> CampaignCreationState:
        with self._lock:
            return self._state

    @property
    def last_transition_applied(self) -> bool:
        """False when the most recent operation was a no-op for the state it was applied to."""
        with self._lock:
            return self._last_transition_applied

    def snapshot(self) -> SessionSnapshot:
        """Current state and last_transition_applied, read together."""
        with self._lock:
            return SessionSnapshot(self._state, self._last_transition_applied)

    def exclusive(self) -> AbstractContextManager[Any]:
        """Hold the session for a sequence of operations and reads.

        Operations from other threads wait until the block exits, so a caller can apply an
        event and then read the snapshot that event produced.
        """
        return self._lock

    def dispatch(self, event: CampaignEvent) -> CampaignCreationState:
        """Apply any event to the current state."""
        return self._advance(event.type, lambda state: transition(state, event))

    def start(self) -> CampaignCreationState:
        return self.dispatch(StartCreationEvent())

    def update_draft(self, draft: CampaignDraft) -> CampaignCreationState:
        """Replace the whole draft."""
        return self.dispatch(UpdateDraftEvent(draft=draft))

    def patch_draft(self, **changes: Any) -> CampaignCreationState:
        """Merge a partial edit into the current draft, then replace it.

        A no-op when the current state carries no draft.

        Raises:
            ValueError: if a field name is unknown or a value has the wrong type.
        """
        unknown = set(changes) - _DRAFT_FIELDS
        if unknown:
            msg = f'Unknown draft field(s): {", ".join(sorted(unknown))}'
            raise ValueError(msg)

        def merge(state: CampaignCreationState) -> CampaignCreationState:
            draft = current_draft(state)
            if draft is None:
                return state
            try:
                patched = CampaignDraft.model_validate({**dict(draft), **changes})
            except PydanticValidationError as exc:
                raise _PatchRejectedError(str(exc)) from exc
            return transition(state, UpdateDraftEvent(draft=patched))

        try:
            return self._advance('UPDATE_DRAFT', merge)
        except _PatchRejectedError as exc:
            raise ValueError(str(exc)) from exc

    def validate(self) -> CampaignCreationState:
        """Run the validate use case against the current draft."""
        return self._advance('VALIDATE', validate_campaign)

    def publish(self, campaign_id: str) -> CampaignCreationState:
        return self.dispatch(PublishEvent(campaign_id=campaign_id))

    def fail(self, message: str) -> CampaignCreationState:
        return self.dispatch(SystemErrorEvent(error=SystemErrorInfo(message=message)))

    def _advance(
        self, label: str, step: Callable[[CampaignCreationState], CampaignCreationState]
    ) -> CampaignCreationState:
        with self._lock:
            previous = self._state
            try:
                successor = step(previous)
            except _PatchRejectedError:
                raise
            except Exception as exc:
                self._log.exception('Unexpected failure while applying %s', label)
                successor = transition(
                    previous, SystemErrorEvent(error=SystemErrorInfo(message=str(exc)))
                )

            self._state = successor
            self._last_transition_applied = successor is not previous

            if self._last_transition_applied:
                self._log.info(
                    'Campaign state changed',
                    event_type=label,
                    from_status=previous.status,
                    to_status=successor.status,
                )
            else:
                self._log.debug('Event ignored', event_type=label, status=previous.status)
            return successor


class _PatchRejectedError(Exception):
    """A partial edit could not be merged into the draft. Not a system failure."""
