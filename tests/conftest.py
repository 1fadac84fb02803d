import pytest


@pytest.fixture(autouse=True)
def _validation_on(monkeypatch):
    monkeypatch.setenv("ROLLERMESH_VALIDATE", "1")
