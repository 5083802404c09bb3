"""Pytest configuration and shared fixtures for all tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_console_handler():
    """Remove the CLI console handler after each test.

    The handler is bound to the ``sys.stderr`` seen when it was installed,
    which pytest replaces per test, so every test starts without one.
    """
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "depinspect-console":
            root.removeHandler(handler)
            handler.close()
