import asyncio
import logging
from typing import Any, Callable

from pydantic import ValidationError

from rosterstore.auth.session import LeaderSession
from rosterstore.core import config
from rosterstore.core.errors import InvalidCredentials, StorageUnavailable, ValidationFailed
from rosterstore.models.user import RegisterRequest, User, login_key_of
from rosterstore.storage.repository import Repository

logger = logging.getLogger(__name__)


def _retrieve_outcome(task: asyncio.Future) -> None:
    # Marks the error as retrieved when the caller stopped waiting on the shield.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug('Auth mutation finished with %s: %s', type(exc).__name__, exc)


class AuthManager:
    """Signs leaders in and out and keeps the current user slot in step.

    Login and register wait for a simulated network round trip before
    touching any state. The wait and the mutation run in a shielded task, so a
    caller that stops waiting does not stop the mutation.
    """

    def __init__(
        self,
        repository: Repository,
        session: LeaderSession | None = None,
        latency_seconds: float | None = None,
        revalidate_on_restore: bool | None = None,
    ) -> None:
        self.repository = repository
        self.session = session or LeaderSession()
        self.latency_seconds = config.AUTH_SIMULATED_LATENCY_SECONDS if latency_seconds is None else latency_seconds
        self.revalidate_on_restore = (
            config.SESSION_REVALIDATE_ON_RESTORE if revalidate_on_restore is None else revalidate_on_restore
        )

    @property
    def login_key_field(self) -> str:
        return self.repository.users.login_key_field

    async def login(self, login_key: str, password: str) -> LeaderSession:
        return await self._after_latency(lambda: self._login(login_key, password))

    async def register(self, data: RegisterRequest | dict) -> LeaderSession:
        request = self._parse_register_request(data)
        return await self._after_latency(lambda: self._register(request))

    def logout(self) -> LeaderSession:
        self.repository.current_user.clear()
        self.session.user = None
        logger.info('Session cleared.')
        return self.session

    def restore_session(self) -> LeaderSession:
        stored_user = self.repository.current_user.get()
        if stored_user is None:
            self.session.user = None
            return self.session

        if self.revalidate_on_restore and self.repository.users.find_by_id(stored_user.id) is None:
            logger.warning('Stored session user %r no longer exists; clearing it.', stored_user.id)
            return self.logout()

        self.session.user = stored_user
        return self.session

    def forgot_password(self, login_key: str) -> bool:
        # Existence check only. No reset flow exists yet.
        return self.repository.users.find_by_login_key(login_key) is not None

    def recover_user_id(self, email: str) -> bool:
        normalized = email.strip()
        return self.repository.users.find(lambda user: user.email == normalized) is not None

    async def _after_latency(self, mutation: Callable[[], Any]) -> Any:
        async def delayed() -> Any:
            if self.latency_seconds > 0:
                await asyncio.sleep(self.latency_seconds)
            return mutation()

        task = asyncio.ensure_future(delayed())
        task.add_done_callback(_retrieve_outcome)
        return await asyncio.shield(task)

    def _login(self, login_key: str, password: str) -> LeaderSession:
        user = self.repository.users.find(
            lambda candidate: login_key_of(candidate, self.login_key_field) == login_key
            and candidate.password == password
        )
        if user is None:
            raise InvalidCredentials('Login key or password does not match.')

        return self._authenticate(user)

    def _register(self, request: RegisterRequest) -> LeaderSession:
        user = self.repository.users.add(User(**request.model_dump(), is_team_leader=True))
        logger.info('Registered leader %r.', user.id)
        try:
            return self._authenticate(user)
        except StorageUnavailable:
            # A failed sign-in leaves no registered user behind.
            self.repository.users.remove(user.id)
            logger.warning('Rolled back registration of %r after the session write failed.', user.id)
            raise

    def _authenticate(self, user: User) -> LeaderSession:
        public_user = self.repository.current_user.set(user.to_public())
        self.session.user = public_user
        logger.info('Leader %r signed in.', public_user.id)
        return self.session

    @staticmethod
    def _parse_register_request(data: RegisterRequest | dict) -> RegisterRequest:
        if isinstance(data, RegisterRequest):
            return data
        try:
            return RegisterRequest.model_validate(data)
        except ValidationError as exc:
            raise ValidationFailed.from_pydantic(exc) from exc
