from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get(
    '/ping',
    tags=['Ping'],
    description='Application ping',
    response_description=('empty response, 204 if able to execute and 5xx if not'),
)
async def ping() -> Response:
    """rudimentary ping"""
    return Response(status_code=204)


@router.get(
    '/healthcheck',
    tags=['Healthcheck'],
    description='Application healthcheck',
    response_description='number of open campaign creation sessions',
)
async def healthcheck(request: Request) -> dict[str, int]:
    """This can be used as a healthcheck endpoint for, e.g. Kubernetes."""
    return {'sessions': len(request.app.state.session_registry)}
