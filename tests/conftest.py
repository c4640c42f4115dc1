"""Shared fixtures for the ctxenv tests."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

EXAMPLE_KEY = "CTXENV_EXAMPLE"
EXAMPLE_VALUE = "real environment"


@pytest.fixture(autouse=True)
def real_environment() -> Iterator[None]:
    """Replace the process environment with one known variable.

    Most tests read the real environment at some point, so its contents
    must be predictable regardless of where the suite runs.
    """
    with patch.dict(os.environ, {EXAMPLE_KEY: EXAMPLE_VALUE}, clear=True):
        yield
