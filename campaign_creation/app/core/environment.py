from typing import Annotated, Literal

from pydantic import AfterValidator, Field, PositiveInt
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)

LogLevel = Literal['CRITICAL', 'FATAL', 'ERROR', 'WARNING', 'WARN', 'INFO', 'DEBUG']


def strip_trailing_slash(value: str) -> str:
    return value.rstrip('/')


StripTrailingSlash = Annotated[str, AfterValidator(strip_trailing_slash)]


class Settings(BaseSettings):
    """variables which can be loaded as environment variables.

    For a valid local setup, see .env.example
    """

    ### GENERIC APP CONFIG ###

    LOG_LEVEL: LogLevel = Field(default='INFO')
    """Log level for the ENTIRE application"""
    PRODUCTION: bool = False
    """If True, this flag enables a few different settings:

    1) Binds to 0.0.0.0 instead of 127.0.0.1
    2) Format logs in JSON instead of the "pretty" format
    3) Turns off uvicorn reload
    4) Assumes that you are running Uvicorn behind a proxy, so starts passing through forwarded headers
    """

    SERVER_PORT: PositiveInt = 8000
    """The port Uvicorn will try to run on"""
    SERVER_WORKERS: PositiveInt = 1
    """Number of workers for Uvicorn.

    Sessions live in process memory, so more than one worker means a session is only visible to the worker which created it.
    """
    MAX_SESSIONS: PositiveInt = 10_000
    """Open sessions kept in memory. When full, published and errored sessions are evicted to make room."""
    BASE_URL: StripTrailingSlash = ''
    """Set this to '' if this is not behind a proxy, set this to your proxy's subpath if this is behind a proxy.

    Do not include the full URI, only include the path component.
    """

    API_KEY: str = Field(default='X' * 32, min_length=32, max_length=255)
    """
    Key used to authorize access to the application. This should never be exposed to users directly, keep this in your backend.
    """

    # pydantic config, NOT an environment variable
    model_config = SettingsConfigDict(
        case_sensitive=True,
        frozen=True,
        env_file='.env',  # not used in production; this only needs to exist if you don't have environment variables already set
        extra='ignore',
        env_ignore_empty=True,  # treat empty ENV strings as None unless the value explicitly defaults to empty string
    )


settings = Settings()
