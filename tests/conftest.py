from __future__ import annotations

import pytest

from cistate.domain.reconciliation import ReconcileContext
from tests.support.accessor import InMemoryCircleCI, make_context


@pytest.fixture
def accessor() -> InMemoryCircleCI:
    return InMemoryCircleCI()


@pytest.fixture
def context(accessor: InMemoryCircleCI) -> ReconcileContext:
    return make_context(accessor)


@pytest.fixture(autouse=True)
def _isolate_circleci_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CIRCLECI_TOKEN", "CIRCLECI_ORGANIZATION", "CIRCLECI_VCS_TYPE", "CIRCLECI_URL"):
        monkeypatch.delenv(name, raising=False)
