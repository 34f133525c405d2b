"""Test configuration for pytest."""

import logging
import os
import pytest

from frozenproof import Validator, set_validator


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['FROZENPROOF_LOG_LEVEL'] = 'WARNING'
    logging.getLogger().setLevel(logging.WARNING)

    # Specifically quiet the validator loggers
    for logger_name in ['frozenproof.validator.core', 'frozenproof.hooks']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)


@pytest.fixture(autouse=True)
def fresh_default_validator():
    """Every test starts with an empty process-wide cache."""
    set_validator(None)
    yield
    set_validator(None)


@pytest.fixture
def validator():
    return Validator()
