import structlog
import uvicorn

from campaign_creation.app.core.environment import settings
from campaign_creation.app.core.log_config import setup_logging

logger = structlog.stdlib.get_logger('campaign-creation.main')


def main() -> None:
    # reload and multi-worker runs start fresh interpreters which never see this configuration;
    # app.main configures logging again inside each of them
    setup_logging()

    host = '0.0.0.0' if settings.PRODUCTION else '127.0.0.1'  # noqa: S104 (mandatory if running in Docker)
    url = f'http://{host}:{settings.SERVER_PORT}{settings.BASE_URL}'
    if settings.PRODUCTION:
        logger.info('Running server at %s', url)
    else:
        reload_str = ', server will reload on file changes' if settings.SERVER_WORKERS == 1 else ''
        logger.info('Running DEVELOPMENT server at %s%s', url, reload_str)
        logger.info('View docs at %s/docs', url)

    uvicorn.run(
        'campaign_creation.app.main:app',
        host=host,
        port=settings.SERVER_PORT,
        reload=(not settings.PRODUCTION and settings.SERVER_WORKERS == 1),
        workers=settings.SERVER_WORKERS,
        root_path=settings.BASE_URL,
        proxy_headers=settings.PRODUCTION,
        forwarded_allow_ips='*' if settings.PRODUCTION else '127.0.0.1',
        server_header=False,
        # override Uvicorn's loggers with our own, and disable the uvicorn access logger
        log_config=None,
        access_log=False,
    )


if __name__ == '__main__':
    main()
