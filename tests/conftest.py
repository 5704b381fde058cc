import pytest

from db import DocumentStore, StoreError, init_db
from main import create_app
from schema import load_configs

COMPANY = "c1"
ADMIN_HEADERS = {"X-Company-Id": COMPANY, "X-Actor-Role": "admin"}


class FlakyStore(DocumentStore):
    """DocumentStore whose n-th batch commits (1-based) fail."""

    def __init__(self, fail_on=(), **kwargs):
        super().__init__(**kwargs)
        self.fail_on = set(fail_on)
        self.commits = 0

    def _apply(self, ops):
        self.commits += 1
        if self.commits in self.fail_on:
            raise StoreError(f"simulated failure on commit {self.commits}")
        super()._apply(ops)


@pytest.fixture
def store(tmp_path):
    """Fresh SQLite-backed document store per test."""
    init_db(f"sqlite:///{tmp_path / 'test.sqlite'}")
    return DocumentStore()


@pytest.fixture
def flaky_store(store):
    """Factory sharing the test database with `store`."""
    def _make(*fail_on):
        return FlakyStore(fail_on=fail_on)
    return _make


@pytest.fixture
def configs():
    return load_configs()


@pytest.fixture
def app(store, configs):
    app = create_app(configs=configs, store=store)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)
