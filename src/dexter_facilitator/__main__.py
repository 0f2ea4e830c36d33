"""Run the facilitator with uvicorn: ``python -m dexter_facilitator``."""

from __future__ import annotations

import logging

import uvicorn
from pydantic import ValidationError

from .config import load_settings
from .http import create_app
from .log import configure_logging
from .signers import ConfigurationError

logger = logging.getLogger("dexter_facilitator")


def main() -> None:
    try:
        settings = load_settings()
    except ValidationError as exc:
        configure_logging("error")
        logger.critical("Invalid facilitator environment configuration\n%s", exc)
        raise SystemExit(1) from exc

    configure_logging(settings.log_level)
    try:
        app = create_app(settings)
    except ConfigurationError as exc:
        logger.critical("%s", exc)
        raise SystemExit(1) from exc

    logger.info("x402 facilitator listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
