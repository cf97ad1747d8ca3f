"""Exit-code mapping — translate domain errors to process exit statuses.

Each domain exception maps to a specific exit code.  Errors raised after the
tool catalog is in hand (metadata or content retrieval) are reported but end
the run normally.
"""

from __future__ import annotations

import logging

from repo_star_advisor.domain.exceptions import (
    ConfigurationError,
    ConnectionPendingError,
    ConnectionUnverifiedError,
    InvalidRepositoryError,
    RepoStarAdvisorError,
    ToolCatalogError,
    ToolNotFoundError,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

_EXCEPTION_EXIT: list[tuple[type[RepoStarAdvisorError], int]] = [
    (ConnectionPendingError, EXIT_OK),
    (ConfigurationError, EXIT_FAILURE),
    (InvalidRepositoryError, EXIT_FAILURE),
    (ConnectionUnverifiedError, EXIT_FAILURE),
    (ToolCatalogError, EXIT_FAILURE),
    (ToolNotFoundError, EXIT_FAILURE),
]


def exit_code_for(exc: BaseException) -> int:
    """Return the exit status for *exc*, logging it at a matching level."""
    for exc_type, code in _EXCEPTION_EXIT:
        if isinstance(exc, exc_type):
            if code == EXIT_OK:
                logger.info("%s", exc)
            else:
                logger.error("%s: %s", type(exc).__name__, exc)
            return code

    if isinstance(exc, RepoStarAdvisorError):
        logger.error("Direct tool execution failed: %s", exc)
        return EXIT_OK

    logger.error("Unhandled exception", exc_info=exc)
    return EXIT_FAILURE
