from __future__ import annotations
import asyncio
import logging
import sys
from repo_star_advisor.domain.exceptions import ConfigurationError
from repo_star_advisor.infrastructure.config import load_settings
from repo_star_advisor.interface.cli import run
from repo_star_advisor.interface.exit_codes import exit_code_for

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def main() -> None:
    """Validate configuration, then run the advisor once."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
        sys.exit(exit_code_for(exc))

    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
    sys.exit(asyncio.run(run(settings)))


if __name__ == "__main__":
    main()
