"""Root-level pytest fixtures for the classcontract test suite.

Every test runs with the enforcement switch cleared from the environment, so
a developer shell exporting CLASSCONTRACT_DISABLE cannot skew results. Tests
that need the switch set it explicitly through monkeypatch.
"""

from typing import Annotated

import pytest
from pydantic import AfterValidator

from classcontract.constraints import TypeRegistry
from classcontract.schemas import DISABLE_ENV_VAR, ContractSettings


def _must_be_even(value: int) -> int:
    if value % 2:
        raise ValueError(f"{value} is not even")
    return value


EvenInt = Annotated[int, AfterValidator(_must_be_even)]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Contracts enabled unless a test says otherwise."""
    monkeypatch.delenv(DISABLE_ENV_VAR, raising=False)


@pytest.fixture
def type_registry():
    """Isolated type registry with an ``EvenInt`` constraint registered.

    Use this instead of the module-level registry so registrations do not
    leak between tests.
    """
    registry = TypeRegistry()
    registry.register("EvenInt", EvenInt)
    return registry


@pytest.fixture
def disabled_settings():
    return ContractSettings(enabled=False)


@pytest.fixture
def disable_contracts(monkeypatch):
    """Set the process-wide switch for the duration of the test."""
    monkeypatch.setenv(DISABLE_ENV_VAR, "1")
