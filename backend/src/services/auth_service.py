"""Registration and login."""
import asyncio
import logging

from sqlalchemy.exc import IntegrityError

from core.passwords import PasswordHasher
from db.user_repository import UserRepository
from models.user import User
from services.exceptions import EmailInUseError, InvalidCredentialsError
from services.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Orchestrates signup and signin over the user repository.

    Errors are deliberately coarse: registration fails only with
    ``EmailInUseError`` and login only with ``InvalidCredentialsError``.
    """

    def __init__(
        self,
        users: UserRepository,
        passwords: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._passwords = passwords
        self._tokens = tokens

    async def register(self, name: str, email: str, password: str) -> User:
        """
        Create a user with a hashed password.

        Raises:
            EmailInUseError: If a user with exactly this email exists, including
                one created concurrently between the lookup and the insert.
        """
        if await self._users.get_by_email(email) is not None:
            raise EmailInUseError()

        password_hash = await asyncio.to_thread(self._passwords.hash, password)
        try:
            user = await self._users.create(name=name, email=email, password_hash=password_hash)
        except IntegrityError as e:
            # Race condition: another request registered the email after our lookup
            raise EmailInUseError() from e

        logger.info("user_registered user_id=%s", user.id)
        return user

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue an access token.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password alike.
        """
        user = await self._users.get_by_email(email)
        if user is None:
            await asyncio.to_thread(self._passwords.verify_dummy, password)
            logger.info("login_failed reason=unknown_email")
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(self._passwords.verify, password, user.password_hash)
        if not valid:
            logger.info("login_failed reason=wrong_password user_id=%s", user.id)
            raise InvalidCredentialsError()

        return user, self._tokens.issue(user)

    def issue_token(self, user: User) -> str:
        """Issue an access token for a freshly registered user."""
        return self._tokens.issue(user)
