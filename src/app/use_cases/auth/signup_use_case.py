import logging

from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse, SignupCommand
from .password_policy import validate_new_password

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[AuthResponse] (token + public user)

    Business Logic:
    1. Validate password length and confirmation
    2. Check if email already exists
    3. Hash password with bcrypt cost factor 12
    4. Create User with role=user
    5. Commit and issue a session token

    The welcome email is sent by the caller after the response, see
    SendWelcomeEmailUseCase.
    """

    def __init__(self, uow: UnitOfWork, token_issuer: SessionTokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, command: SignupCommand) -> Result[AuthResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with name, email, password, password_confirm

        Returns:
            Result[AuthResponse] with token and user data,
            or Error(INVALID_PASSWORD / PASSWORD_MISMATCH / EMAIL_ALREADY_EXISTS)
        """
        validation = validate_new_password(command.password, command.password_confirm)
        if validation.is_err():
            return Return.err(validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            user = User(
                name=command.name,
                email=command.email,
                password_hash=hash_password(command.password),
                role=UserRole.user,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(f"User signed up: {user.id}")
            token = self.token_issuer.issue(user.id)
            return Return.ok(AuthResponse.for_user(user, token))
