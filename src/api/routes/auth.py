from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.api.error import ClientError, DependencyError, ServerError
from src.api.utils.cookies import clear_session_cookie, set_session_cookie
from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.email_service import EmailRecipient, IEmailService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    MessageResponse,
    RequestPasswordResetUseCase,
    SendWelcomeEmailUseCase,
    SignupCommand,
    SignupUseCase,
    UpdatePasswordUseCase,
    UserInfo,
)
from src.depends import (
    get_config,
    get_current_user,
    get_email_service,
    get_token_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/users", tags=["Authentication"])


def _site_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., max_length=72, description="Password (min 8 chars)")
    password_confirm: str = Field(
        ..., alias="passwordConfirm", max_length=72, description="Repeat of password"
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    payload: SignupRequest,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
    email_service: IEmailService = Depends(get_email_service),
    config=Depends(get_config),
):
    """
    User Signup

    Creates a user account, logs it in and queues a welcome email.

    Raises:
        - 400 Bad Request: Invalid input, password mismatch or email taken
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        password_confirm=payload.password_confirm,
    )

    result = await SignupUseCase(uow, token_issuer).execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "INVALID_PASSWORD", "PASSWORD_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    auth = result.value
    user = auth.data.user

    # Runs after the response is sent; failures are logged, never surfaced
    background_tasks.add_task(
        SendWelcomeEmailUseCase(email_service).execute,
        EmailRecipient(email=user.email, name=user.name),
        f"{_site_url(request)}/me",
    )

    set_session_cookie(response, request, auth.token, config)
    return auth


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Both fields are optional here so that a missing one is reported by the
    use case with its own message.
    """

    email: Optional[EmailStr] = Field(None, description="User email address")
    password: Optional[str] = Field(None, max_length=72, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
    config=Depends(get_config),
):
    """
    User Login

    Raises:
        - 400 Bad Request: Email or password missing
        - 401 Unauthorized: Incorrect email or password
        - 500 Internal Server Error: Server error
    """
    result = await LoginUseCase(uow, token_issuer).execute(payload.email, payload.password)

    if result.is_err():
        error = result.error
        if error.code == "MISSING_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_session_cookie(response, request, result.value.token, config)
    return result.value


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
async def logout(response: Response, config=Depends(get_config)):
    """
    User Logout

    Replaces the session cookie with a short-lived sentinel. Tokens sent in
    the Authorization header are unaffected until they expire.
    """
    clear_session_cookie(response, config)
    return MessageResponse(status="success")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgotPassword", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def forgot_password(
    payload: ForgotPasswordRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_service: IEmailService = Depends(get_email_service),
    config=Depends(get_config),
):
    """
    Request Password Reset

    Stores a hashed reset token and emails the raw token in a reset link.

    Raises:
        - 403 Forbidden: No user with this email address
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_service,
        expires_in=timedelta(minutes=config.PASSWORD_RESET_EXPIRES_MINUTES),
    )
    reset_url_base = f"{_site_url(request)}{config.API_PREFIX}/users/resetPassword"
    result = await use_case.execute(payload.email, reset_url_base)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "EMAIL_DELIVERY_FAILED":
            raise DependencyError(error)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(..., max_length=72, description="New password (min 8 chars)")
    password_confirm: str = Field(
        ..., alias="passwordConfirm", max_length=72, description="Repeat of new password"
    )


@router.patch(
    "/resetPassword/{token}", status_code=status.HTTP_200_OK, response_model=AuthResponse
)
async def reset_password(
    token: str,
    payload: ResetPasswordRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
    config=Depends(get_config),
):
    """
    Confirm Password Reset

    Redeems the emailed token, sets the new password and logs the user in.

    Raises:
        - 400 Bad Request: Token invalid or expired, or new password rejected
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow, token_issuer)
    result = await use_case.execute(token, payload.password, payload.password_confirm)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "INVALID_PASSWORD", "PASSWORD_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, request, result.value.token, config)
    return result.value


class UpdatePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    password_current: str = Field(
        ..., alias="passwordCurrent", max_length=72, description="Current password"
    )
    password: str = Field(..., max_length=72, description="New password (min 8 chars)")
    password_confirm: str = Field(
        ..., alias="passwordConfirm", max_length=72, description="Repeat of new password"
    )


@router.patch(
    "/updateMyPassword", status_code=status.HTTP_200_OK, response_model=AuthResponse
)
async def update_my_password(
    payload: UpdatePasswordRequest,
    request: Request,
    response: Response,
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
    config=Depends(get_config),
):
    """
    Update Current User Password

    Raises:
        - 400 Bad Request: New password rejected
        - 401 Unauthorized: Not logged in or current password incorrect
        - 500 Internal Server Error: Server error
    """
    use_case = UpdatePasswordUseCase(uow, token_issuer)
    result = await use_case.execute(
        UUID(current_user.id),
        payload.password_current,
        payload.password,
        payload.password_confirm,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INCORRECT_PASSWORD", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INVALID_PASSWORD", "PASSWORD_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, request, result.value.token, config)
    return result.value
