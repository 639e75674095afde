from fastapi import HTTPException
from fastapi.security import APIKeyHeader

from ...core.environment import settings

api_key_header = APIKeyHeader(name='Authorization', scheme_name='API key', auto_error=False)


def check_api_key(api_key: str | None) -> None:
    if api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail='invalid or incorrect API key provided')
