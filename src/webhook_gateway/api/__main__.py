"""
webhook_gateway.api.__main__

Entrypoint for running the gateway via `python -m webhook_gateway.api`.

Responsibilities:
- Load settings.
- Create the app, aborting on configuration errors.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn
from pydantic import ValidationError

from webhook_gateway.api.app import create_app
from webhook_gateway.exceptions import ConfigurationError
from webhook_gateway.observability.logging import configure_logging, get_logger
from webhook_gateway.settings import Settings, get_settings

log = get_logger(__name__)

_FALLBACK_LOG_LEVEL = "INFO"


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        # Settings could not be read, so neither can the configured log level.
        configure_logging(
            service_name=Settings.model_fields["service_name"].default,
            level=_FALLBACK_LOG_LEVEL,
        )
        log.critical("invalid_configuration", error=str(e))
        raise SystemExit(1) from e

    configure_logging(service_name=settings.service_name, level=settings.log_level)
    try:
        app = create_app(settings=settings)
    except ConfigurationError as e:
        log.critical("invalid_configuration", error=str(e))
        raise SystemExit(1) from e

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
