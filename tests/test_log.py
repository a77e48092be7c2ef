import logging

from jwkpem.log import get_logger, setup_logging


def test_package_loggers_share_hierarchy():
    assert get_logger("pipeline").name == "jwkpem.pipeline"
    package_logger = logging.getLogger("jwkpem")
    assert get_logger("io").parent is package_logger


def test_setup_logging_sets_level():
    setup_logging("debug")
    assert logging.getLogger("jwkpem").level == logging.DEBUG
    setup_logging()
    assert logging.getLogger("jwkpem").level == logging.WARNING
