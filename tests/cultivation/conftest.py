import pytest


@pytest.fixture(autouse=True)
def _ctx(cultivation_bed):
    from cultivation.domain import cultivation

    with cultivation_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in cultivation.providers.items():
            provider._data_reset()
        cultivation.event_store.store._data_reset()
