import pytest


@pytest.fixture(autouse=True)
def _ctx(warehousing_bed):
    from warehousing.domain import warehousing

    with warehousing_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in warehousing.providers.items():
            provider._data_reset()
        warehousing.event_store.store._data_reset()


@pytest.fixture()
def sleeps(monkeypatch):
    """Record dispatch waits instead of sleeping."""
    calls = []
    monkeypatch.setattr("warehousing.package.dispatch.sleep", calls.append)
    return calls
