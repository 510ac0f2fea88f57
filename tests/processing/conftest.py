"""Processing tests run with the cultivation domain alongside.

The in-process cultivation client pushes the cultivation context itself, so
both beds must be initialized; the processing context is the active one.
"""

import pytest
from processing.cultivation_client import reset_client, set_client
from processing.cultivation_client.in_process import InProcessCultivationClient


@pytest.fixture(autouse=True)
def _ctx(cultivation_bed, processing_bed):
    from cultivation.domain import cultivation
    from processing.domain import processing

    set_client(InProcessCultivationClient())
    with processing_bed.domain_context():
        yield

        for domain in (cultivation, processing):
            for _, provider in domain.providers.items():
                provider._data_reset()
            domain.event_store.store._data_reset()
    reset_client()
