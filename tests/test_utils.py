# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for utils.py."""

import logging

from xmpreader.utils import LOG_FORMAT, setup_logging, split_clark


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default_level_is_warning(self) -> None:
        """Default log level is WARNING."""
        logger = setup_logging()
        assert logger.level == logging.WARNING

    def test_verbose_sets_debug(self) -> None:
        """verbose=True sets DEBUG level."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_quiet_sets_error(self) -> None:
        """quiet=True sets ERROR level."""
        logger = setup_logging(quiet=True)
        assert logger.level == logging.ERROR

    def test_quiet_takes_precedence(self) -> None:
        """quiet takes precedence over verbose."""
        logger = setup_logging(verbose=True, quiet=True)
        assert logger.level == logging.ERROR

    def test_returns_xmpreader_logger(self) -> None:
        """Returns xmpreader logger."""
        logger = setup_logging()
        assert logger.name == "xmpreader"

    def test_no_duplicate_handlers(self) -> None:
        """Repeated calls keep a single handler."""
        setup_logging()
        logger = setup_logging(verbose=True)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG

    def test_handler_format(self) -> None:
        logger = setup_logging()
        assert logger.handlers[0].formatter._fmt == LOG_FORMAT


class TestSplitClark:
    """Tests for split_clark."""

    def test_namespaced(self) -> None:
        assert split_clark("{http://ns.adobe.com/tiff/1.0/}Make") == (
            "http://ns.adobe.com/tiff/1.0/",
            "Make",
        )

    def test_no_namespace(self) -> None:
        assert split_clark("Make") is None

    def test_empty_local_name(self) -> None:
        assert split_clark("{urn:x}") == ("urn:x", "")
