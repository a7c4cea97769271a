# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for xmpreader."""

import logging
import sys

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for xmpreader.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for xmpreader.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        # Ignored properties and rejected values are reported at INFO,
        # which is too chatty for a default run.
        level = logging.WARNING

    xmpreader_logger = logging.getLogger("xmpreader")
    xmpreader_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    xmpreader_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    xmpreader_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return xmpreader_logger


def split_clark(name: str) -> tuple[str, str] | None:
    """Splits a Clark-notation name (``{uri}local``) into its parts.

    Returns:
        ``(uri, local)`` or None if the name carries no namespace.
    """
    if not name.startswith("{"):
        return None
    uri, _, local = name[1:].partition("}")
    return uri, local
