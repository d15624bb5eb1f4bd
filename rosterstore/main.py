import logging

from sqlalchemy.engine import Engine

from rosterstore.auth.auth_manager import AuthManager
from rosterstore.core import config
from rosterstore.core.errors import StorageUnavailable
from rosterstore.database import create_store_engine
from rosterstore.storage.backing_store import KeyValueStore
from rosterstore.storage.repository import Repository
from rosterstore.teams.roster import RosterManager

logger = logging.getLogger(__name__)


class RosterStoreApp:
    """Everything the UI collaborator needs, wired around one backing store."""

    def __init__(self, engine: Engine, store: KeyValueStore, repository: Repository, auth: AuthManager, roster: RosterManager) -> None:
        self.engine = engine
        self.store = store
        self.repository = repository
        self.auth = auth
        self.roster = roster

    @property
    def session(self):
        return self.auth.session


def initialize_store(store: KeyValueStore) -> None:
    try:
        store.ensure_ready()
    except StorageUnavailable:
        logger.error('Backing store initialization failed. Check DATABASE_URL and file permissions.')
        raise


def create_app(
    database_url: str | None = None,
    engine: Engine | None = None,
    latency_seconds: float | None = None,
) -> RosterStoreApp:
    config.validate_runtime_config()

    engine = engine or create_store_engine(database_url)
    store = KeyValueStore(engine)
    initialize_store(store)

    repository = Repository(store)
    auth = AuthManager(repository, latency_seconds=latency_seconds)
    auth.restore_session()
    roster = RosterManager(repository)

    logger.info('Roster store ready (session %s).', auth.session.state.value)
    return RosterStoreApp(engine, store, repository, auth, roster)
