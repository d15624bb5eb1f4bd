import pytest
from sqlalchemy import create_engine

from rosterstore.auth.auth_manager import AuthManager
from rosterstore.storage.backing_store import KeyValueStore
from rosterstore.storage.repository import Repository
from rosterstore.teams.roster import RosterManager


@pytest.fixture
def engine():
    engine = create_engine('sqlite:///:memory:')
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(engine) -> KeyValueStore:
    return KeyValueStore(engine)


@pytest.fixture
def repository(store: KeyValueStore) -> Repository:
    return Repository(store, login_key_field='userId')


@pytest.fixture
def auth(repository: Repository) -> AuthManager:
    return AuthManager(repository, latency_seconds=0, revalidate_on_restore=False)


@pytest.fixture
def roster(repository: Repository) -> RosterManager:
    return RosterManager(repository)


@pytest.fixture
def students() -> list[dict]:
    return [
        {'fullName': 'Asha Rao', 'class': '10th', 'place': 'Mysuru', 'school': 'Sadvidya High School'},
        {'fullName': 'Ravi Kumar', 'class': '9th', 'place': 'Mandya', 'school': 'Government High School'},
        {'fullName': 'Meena Shetty', 'class': '10th', 'place': 'Udupi', 'school': 'Vidyodaya School'},
        {'fullName': 'Karthik N', 'class': '8th', 'place': 'Hassan', 'school': 'Rotary School'},
        {'fullName': 'Divya P', 'class': '9th', 'place': 'Tumakuru', 'school': 'Sarvodaya School'},
    ]


@pytest.fixture
def registration() -> dict:
    return {
        'name': 'Alice Leader',
        'userId': 'alice1',
        'password': 'secret1',
        'phone': '9876543210',
        'email': 'alice@example.edu',
        'organization': 'Science Club',
        'role': 'Coordinator',
    }
