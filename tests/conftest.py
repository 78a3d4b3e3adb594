import os
from datetime import date, timedelta
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
    """Select the domain.toml overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


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


@pytest.fixture(scope="session")
def raffle_bed():
    from raffle.domain import raffle

    bed = DomainFixture(raffle)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(raffle_bed):
    with raffle_bed.domain_context():
        yield

    from raffle.auth import reset_auth
    from raffle.storage import reset_storage

    reset_storage()
    reset_auth()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def running_event():
    """An active event whose window contains today, stored in the repository."""
    from protean import current_domain
    from raffle.catalogue.event import EventStatus, RaffleEvent

    today = date.today()
    event = RaffleEvent.create(
        name="Spring Gala Raffle",
        start_date=today - timedelta(days=1),
        end_date=today + timedelta(days=7),
        status=EventStatus.ACTIVE.value,
    )
    current_domain.repository_for(RaffleEvent).add(event)
    return event


@pytest.fixture()
def make_item(running_event):
    """Build and store a raffle item for the running event."""
    from protean import current_domain
    from raffle.catalogue.item import RaffleItem

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "event_id": str(running_event.id),
            "item_number": f"{counter['n']:03d}",
            "name": f"Prize {counter['n']}",
            "price": 5.0,
        }
        fields.update(overrides)
        item = RaffleItem.create(**fields)
        current_domain.repository_for(RaffleItem).add(item)
        return current_domain.repository_for(RaffleItem).get(item.id)

    return _make


@pytest.fixture()
def buyer_fields():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "confirm_email": "jane@example.com",
        "phone": "555-0100",
        "address": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }
