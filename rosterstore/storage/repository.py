"""Typed collections cached in memory and mirrored to the backing store.

Each collection lives under one key of the backing store as a JSON array.
Collections are loaded once when the repository is built (or reloaded) and
every mutation rewrites the whole array. That is an O(n) write per mutation,
which is fine for the few hundred records this store is meant to hold; an
indexed table could replace it behind the same methods.

New contents are written to the backing store before they replace the cache,
so a failed write leaves the in-memory view unchanged. Reads hand out deep
copies, so editing a returned entity never reaches the cache or the next write.

Nothing coordinates two processes writing the same database: whichever one
rewrites a collection last wins, and the other's cache goes stale.
"""

import json
import logging
from typing import Callable, Generic, Iterable, List, TypeVar

from pydantic import BaseModel, ValidationError

from rosterstore.core import config
from rosterstore.core.errors import DuplicateUser, NotFound, StorageUnavailable, ValidationFailed
from rosterstore.core.ids import IdGenerator
from rosterstore.models.document import Document
from rosterstore.models.project import ProjectDetails
from rosterstore.models.team import Team
from rosterstore.models.teammate import Teammate
from rosterstore.models.user import PublicUser, User, login_key_of
from rosterstore.storage.backing_store import KeyValueStore

logger = logging.getLogger(__name__)

CURRENT_USER_KEY = 'user'
USERS_KEY = 'users'
TEAMS_KEY = 'teams'
TEAMMATES_KEY = 'teammates'
DOCUMENTS_KEY = 'documents'
PROJECT_DETAILS_KEY = 'projectDetails'
PROJECT_FILES_KEY = 'projectFiles'

EntityT = TypeVar('EntityT', bound=BaseModel)


def dump_json(payload) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(',', ':'))


def load_json(store: KeyValueStore, key: str):
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.exception('Stored value under %r is not valid JSON.', key)
        raise StorageUnavailable(f'Stored value under {key!r} could not be decoded.') from exc


def patch_changes(patch: BaseModel) -> dict:
    return {
        field_name: getattr(patch, field_name)
        for field_name in patch.model_fields_set
        if getattr(patch, field_name) is not None
    }


class EntityCollection(Generic[EntityT]):
    def __init__(self, store: KeyValueStore, key: str, model: type[EntityT], id_generator: IdGenerator) -> None:
        self.store = store
        self.key = key
        self.model = model
        self.id_generator = id_generator
        self._items: list[EntityT] = []

    def load(self) -> None:
        payload = load_json(self.store, self.key)
        if payload is None:
            self._items = []
            return
        if not isinstance(payload, list):
            raise StorageUnavailable(f'Stored value under {self.key!r} is not a list.')
        try:
            self._items = [self.model.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.exception('Stored records under %r do not match %s.', self.key, self.model.__name__)
            raise StorageUnavailable(f'Stored value under {self.key!r} could not be decoded.') from exc

    def list(self) -> list[EntityT]:
        return [item.model_copy(deep=True) for item in self._items]

    def find_by_id(self, entity_id: str) -> EntityT | None:
        return self.find(lambda item: item.id == entity_id)

    def find(self, predicate: Callable[[EntityT], bool]) -> EntityT | None:
        for item in self._items:
            if predicate(item):
                return item.model_copy(deep=True)
        return None

    def add(self, entity: EntityT) -> EntityT:
        return self.add_many([entity])[0]

    def add_many(self, entities: Iterable[EntityT]) -> List[EntityT]:
        """Append entities in one write. Entities with a blank id get a fresh one."""
        existing_ids = {item.id for item in self._items}
        stored: list[EntityT] = []
        for entity in entities:
            entity = entity.model_copy(deep=True)
            if not entity.id:
                entity.id = self.id_generator.next_id()
            if entity.id in existing_ids:
                raise ValidationFailed(f'Id {entity.id!r} is already in use.', field='id', reason='duplicate_id')
            self.check_new(entity, [*self._items, *stored])
            existing_ids.add(entity.id)
            stored.append(entity)

        self._commit([*self._items, *stored])
        return [item.model_copy(deep=True) for item in stored]

    def update(self, entity_id: str, patch: BaseModel) -> EntityT:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                updated = item.model_copy(update=patch_changes(patch))
                others = self._items[:index] + self._items[index + 1:]
                self.check_new(updated, others)
                return self.replace(updated)
        raise NotFound(f'No {self.model.__name__} with id {entity_id!r}.')

    def replace(self, entity: EntityT) -> EntityT:
        if not any(item.id == entity.id for item in self._items):
            raise NotFound(f'No {self.model.__name__} with id {entity.id!r}.')
        stored = entity.model_copy(deep=True)
        self._commit([stored if item.id == stored.id else item for item in self._items])
        return stored.model_copy(deep=True)

    def remove(self, entity_id: str) -> bool:
        new_items = [item for item in self._items if item.id != entity_id]
        existed = len(new_items) != len(self._items)
        self._commit(new_items)
        return existed

    def check_new(self, entity: EntityT, others: List[EntityT]) -> None:
        """Hook for collection-level invariants, run before any write."""

    def _commit(self, new_items: List[EntityT]) -> None:
        self.store.set(self.key, dump_json([item.model_dump(by_alias=True, mode='json') for item in new_items]))
        self._items = new_items
        logger.debug('Rewrote %r with %d records.', self.key, len(new_items))


class UserCollection(EntityCollection[User]):
    def __init__(self, store: KeyValueStore, id_generator: IdGenerator, login_key_field: str) -> None:
        super().__init__(store, USERS_KEY, User, id_generator)
        self.login_key_field = login_key_field

    def find_by_login_key(self, login_key: str) -> User | None:
        # Linear scan; swap for an index without changing callers if the roster grows.
        return self.find(lambda user: login_key_of(user, self.login_key_field) == login_key)

    def check_new(self, entity: User, others: list[User]) -> None:
        login_key = login_key_of(entity, self.login_key_field)
        if any(login_key_of(other, self.login_key_field) == login_key for other in others):
            raise DuplicateUser(f'A user with {self.login_key_field} {login_key!r} already exists.', field=self.login_key_field)


class ModelSlot(Generic[EntityT]):
    """A single optional object stored under one key."""

    def __init__(self, store: KeyValueStore, key: str, model: type[EntityT]) -> None:
        self.store = store
        self.key = key
        self.model = model
        self._value: EntityT | None = None

    def load(self) -> None:
        payload = load_json(self.store, self.key)
        if payload is None:
            self._value = None
            return
        try:
            self._value = self.model.model_validate(payload)
        except ValidationError as exc:
            logger.exception('Stored value under %r does not match %s.', self.key, self.model.__name__)
            raise StorageUnavailable(f'Stored value under {self.key!r} could not be decoded.') from exc

    def get(self) -> EntityT | None:
        return self._value.model_copy(deep=True) if self._value is not None else None

    def set(self, value: EntityT) -> EntityT:
        self.store.set(self.key, dump_json(value.model_dump(by_alias=True, mode='json')))
        self._value = value.model_copy(deep=True)
        return value.model_copy(deep=True)

    def clear(self) -> None:
        self.store.remove(self.key)
        self._value = None


class FileNameList:
    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key
        self._names: list[str] = []

    def load(self) -> None:
        payload = load_json(self.store, self.key)
        if payload is None:
            self._names = []
            return
        if not isinstance(payload, list):
            raise StorageUnavailable(f'Stored value under {self.key!r} is not a list.')
        self._names = [str(name) for name in payload]

    def list(self) -> list[str]:
        return list(self._names)

    def add(self, names: Iterable[str]) -> List[str]:
        return self._commit([*self._names, *names])

    def remove(self, name: str) -> bool:
        new_names = [existing for existing in self._names if existing != name]
        existed = len(new_names) != len(self._names)
        self._commit(new_names)
        return existed

    def _commit(self, new_names: List[str]) -> List[str]:
        self.store.set(self.key, dump_json(new_names))
        self._names = new_names
        return list(new_names)


class Repository:
    """Owns every durable collection and slot of the store."""

    def __init__(
        self,
        store: KeyValueStore,
        id_generator: IdGenerator | None = None,
        login_key_field: str | None = None,
    ) -> None:
        self.store = store
        self.id_generator = id_generator or IdGenerator()

        self.users = UserCollection(store, self.id_generator, login_key_field or config.LOGIN_KEY_FIELD)
        self.teams: EntityCollection[Team] = EntityCollection(store, TEAMS_KEY, Team, self.id_generator)
        self.teammates: EntityCollection[Teammate] = EntityCollection(store, TEAMMATES_KEY, Teammate, self.id_generator)
        self.documents: EntityCollection[Document] = EntityCollection(store, DOCUMENTS_KEY, Document, self.id_generator)

        self.current_user: ModelSlot[PublicUser] = ModelSlot(store, CURRENT_USER_KEY, PublicUser)
        self.project_details: ModelSlot[ProjectDetails] = ModelSlot(store, PROJECT_DETAILS_KEY, ProjectDetails)
        self.project_files = FileNameList(store, PROJECT_FILES_KEY)

        self.reload()

    def reload(self) -> None:
        for part in (
            self.users,
            self.teams,
            self.teammates,
            self.documents,
            self.current_user,
            self.project_details,
            self.project_files,
        ):
            part.load()

        for collection in (self.users, self.teams, self.teammates, self.documents):
            self.id_generator.observe(item.id for item in collection.list())
        self.id_generator.observe(member.id for team in self.teams.list() for member in team.members)
