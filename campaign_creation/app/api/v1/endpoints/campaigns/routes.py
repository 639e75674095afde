"""Endpoints which let an API client drive the campaign creation lifecycle."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException, Request, Response, Security

from .....contract.campaign_draft_input import contract_json_schema, parse_campaign_draft
from .....core.campaign_session import CampaignCreationSession
from .....core.exceptions import (
    CampaignContractError,
    SessionLimitError,
    SessionNotFoundError,
)
from .....core.log_config import logger
from .....core.session_registry import InMemorySessionRegistry
from .....domain.draft import CampaignDraft
from .....domain.rules import validate_campaign_draft
from ...api_key import api_key_header, check_api_key
from .models import ContractErrorResponse, DraftValidationResponse, PublishRequest, SessionResponse

router = APIRouter()

_CONTRACT_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    422: {'model': ContractErrorResponse, 'description': 'Input violates the draft contract'},
}


def _registry(request: Request) -> InMemorySessionRegistry:
    return request.app.state.session_registry


def _session(request: Request, session_id: UUID) -> CampaignCreationSession:
    try:
        return _registry(request).get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def _admit_draft(payload: Any) -> CampaignDraft:
    try:
        return parse_campaign_draft(payload)
    except CampaignContractError as e:
        logger.info('Rejected campaign draft', issue_count=len(e.issues))
        raise HTTPException(
            status_code=422, detail=[issue.model_dump() for issue in e.issues]
        ) from e


def _session_response(session: CampaignCreationSession) -> SessionResponse:
    state, transitioned = session.snapshot()
    return SessionResponse(session_id=session.session_id, transitioned=transitioned, state=state)


@router.get(
    '/contract',
    description='JSON Schema of the campaign draft accepted by this service',
    response_description='JSON Schema, draft 2020-12',
)
async def get_contract(
    api_key: Annotated[str | None, Security(api_key_header)],
) -> dict[str, Any]:
    check_api_key(api_key)
    return contract_json_schema()


@router.post(
    '/validate',
    description='Check a draft against the contract and the business rules without a session',
    response_description='Every violated business rule, in evaluation order',
    responses=_CONTRACT_ERROR_RESPONSES,
)
def validate_draft(
    payload: Annotated[Any, Body(media_type='application/json')],
    api_key: Annotated[str | None, Security(api_key_header)],
) -> DraftValidationResponse:
    check_api_key(api_key)
    draft = _admit_draft(payload)
    errors = validate_campaign_draft(draft)
    return DraftValidationResponse(valid=not errors, errors=errors)


@router.post(
    '/sessions',
    status_code=201,
    description='Open a new campaign creation session in the idle state',
)
def create_session(
    request: Request,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    try:
        session = _registry(request).create()
    except SessionLimitError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    logger.info('Opened campaign creation session', session_id=str(session.session_id))
    return _session_response(session)


@router.get('/sessions/{session_id}', description='Current state of a session')
def get_session(
    request: Request,
    session_id: UUID,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    return _session_response(_session(request, session_id))


@router.delete('/sessions/{session_id}', status_code=204, description='Discard a session')
def delete_session(
    request: Request,
    session_id: UUID,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> Response:
    check_api_key(api_key)
    try:
        _registry(request).remove(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=204)


@router.post('/sessions/{session_id}/start', description='START_CREATION')
def start_creation(
    request: Request,
    session_id: UUID,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    session = _session(request, session_id)
    with session.exclusive():
        session.start()
        return _session_response(session)


@router.put(
    '/sessions/{session_id}/draft',
    description='UPDATE_DRAFT with a whole draft, admitted through the contract first',
    responses=_CONTRACT_ERROR_RESPONSES,
)
def update_draft(
    request: Request,
    session_id: UUID,
    payload: Annotated[Any, Body(media_type='application/json')],
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    session = _session(request, session_id)
    draft = _admit_draft(payload)
    with session.exclusive():
        session.update_draft(draft)
        return _session_response(session)


@router.post('/sessions/{session_id}/validate', description='Validate the current draft')
def validate_session(
    request: Request,
    session_id: UUID,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    session = _session(request, session_id)
    with session.exclusive():
        session.validate()
        return _session_response(session)


@router.post('/sessions/{session_id}/publish', description='PUBLISH a ready campaign')
def publish(
    request: Request,
    session_id: UUID,
    body: PublishRequest,
    api_key: Annotated[str | None, Security(api_key_header)],
) -> SessionResponse:
    check_api_key(api_key)
    session = _session(request, session_id)
    with session.exclusive():
        session.publish(body.campaign_id)
        return _session_response(session)
