import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the configuration overlay before any domain module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domain beds (one per bounded context, shared across the session)
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def cultivation_bed():
    from cultivation.domain import cultivation

    bed = DomainFixture(cultivation)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def processing_bed():
    from processing.domain import processing

    bed = DomainFixture(processing)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def warehousing_bed():
    from warehousing.domain import warehousing

    bed = DomainFixture(warehousing)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture()
def internal_headers():
    return {"x-internal-key": os.environ["INTERNAL_API_KEY"]}
