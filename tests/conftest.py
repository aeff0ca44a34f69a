"""Shared test fixtures."""
import threading
from datetime import datetime, timezone, timedelta

import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mission_control.database import Base
from mission_control.errors import StoreUnavailable, TriggerUnavailable
from mission_control.models.lead import Lead
from mission_control.services.collector import CollectionResult


class FakeStore:
    """In-memory LeadStore double. Records calls; can be told to fail."""

    name = 'fake'

    def __init__(self, leads=()):
        self.leads = list(leads)
        self.fail_fetch = False
        self.fail_update = False
        self.fetch_calls = 0
        self.update_calls = []

    def fetch_all(self):
        self.fetch_calls += 1
        if self.fail_fetch:
            raise StoreUnavailable('fetch_all', 'connection refused')
        return sorted(self.leads, key=lambda l: l.created_at, reverse=True)

    def update_status(self, lead_id, new_status):
        self.update_calls.append((lead_id, new_status))
        if self.fail_update:
            raise StoreUnavailable('update_status', 'connection reset')
        self.leads = [l.with_status(new_status) if l.id == lead_id else l for l in self.leads]


class FakeCollector:
    """Collection job double. Adds `new_leads` to the store when triggered."""

    def __init__(self, store=None, leads_saved=0, new_leads=()):
        self.store = store
        self.leads_saved = leads_saved
        self.new_leads = list(new_leads)
        self.fail = False
        self.calls = []
        # When set, trigger() blocks until the test releases it
        self.gate = None
        self.entered = threading.Event()

    def trigger(self, platform):
        self.calls.append(platform)
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.fail:
            raise TriggerUnavailable(platform, 'could not connect to http://127.0.0.1:8000')
        if self.store is not None:
            self.store.leads.extend(self.new_leads)
        return CollectionResult(platform=platform, leads_saved=self.leads_saved)


@pytest.fixture
def make_lead():
    """Factory fixture — builds a Lead with sensible defaults."""
    base = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def _make(id='1', status='new', age_hours=0, **overrides):
        defaults = dict(
            id=str(id),
            platform='reddit',
            content=f'Post {id}',
            url=f'https://reddit.com/r/test/{id}',
            score='high',
            intent='hiring',
            context='Explicit request for help',
            outreach='Hi! Happy to help.',
            status=status,
            created_at=base - timedelta(hours=age_hours),
        )
        defaults.update(overrides)
        return Lead(**defaults)
    return _make


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_collector(fake_store):
    return FakeCollector(store=fake_store)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import mission_control.models.db_lead  # noqa: F401
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def app(fake_store, fake_collector):
    """Flask test app wired to the fake store and collector."""
    from mission_control import create_app
    app = create_app(store=fake_store, collector=fake_collector)
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def controller(app):
    from mission_control.extensions import EXTENSION_KEY
    return app.extensions[EXTENSION_KEY]


@pytest.fixture(autouse=True)
def _no_slack():
    """Never post to a real webhook from tests."""
    with patch('mission_control.services.notifications.SLACK_WEBHOOK_URL', None):
        yield
