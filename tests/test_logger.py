from __future__ import annotations

import logging

from rendezvous.utils.logger import PACKAGE_LOGGER_NAME, configure_logging, get_logger


def test_module_loggers_live_under_package_logger() -> None:
    assert get_logger("rendezvous.services.time_consensus_service").name == (
        "rendezvous.services.time_consensus_service"
    )
    assert get_logger("scripts.validate_environment").name == "rendezvous.scripts.validate_environment"


def test_level_override_applies_after_first_configuration() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    original_level = package_logger.level
    try:
        configure_logging()
        configure_logging("debug")
        assert package_logger.level == logging.DEBUG
        configure_logging("WARNING")
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(original_level)


def test_handler_is_attached_once() -> None:
    package_logger = configure_logging()
    handler_count = len(package_logger.handlers)

    configure_logging("INFO")
    get_logger("rendezvous.domain.grid")

    assert len(package_logger.handlers) == handler_count
