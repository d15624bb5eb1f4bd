from rosterstore.auth.auth_manager import AuthManager
from rosterstore.core.results import OperationResult, run_async_operation, run_operation
from rosterstore.models.user import RegisterRequest


async def login(auth: AuthManager, login_key: str, password: str) -> OperationResult:
    async def sign_in():
        session = await auth.login(login_key, password)
        return session.user

    return await run_async_operation(sign_in)


async def register(auth: AuthManager, data: RegisterRequest | dict) -> OperationResult:
    async def sign_up():
        session = await auth.register(data)
        return session.user

    return await run_async_operation(sign_up)


async def logout(auth: AuthManager) -> OperationResult:
    return await run_operation(auth.logout)


async def restore_session(auth: AuthManager) -> OperationResult:
    return await run_operation(auth.restore_session)


async def forgot_password(auth: AuthManager, login_key: str) -> OperationResult:
    return await run_operation(lambda: auth.forgot_password(login_key))


async def recover_user_id(auth: AuthManager, email: str) -> OperationResult:
    return await run_operation(lambda: auth.recover_user_id(email))


async def current_user(auth: AuthManager) -> OperationResult:
    return await run_operation(lambda: auth.session.user)
