import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.console_email_service import ConsoleEmailService
from src.adapter.services.smtp_email_service import SmtpEmailService
from src.app.services.email_service import IEmailService
from .error import ClientError, DependencyError, ServerError
from .utils.jwt import SessionTokenIssuer

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    error_dict = {"code": "VALIDATION_ERROR", "message": "; ".join(messages)}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict}
    )


async def handle_dependency_error(request: Request, exc: DependencyError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.error(f"Dependency error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_email_service(ApplicationConfig) -> IEmailService:
    if ApplicationConfig.EMAIL_BACKEND == "smtp":
        return SmtpEmailService(
            host=ApplicationConfig.EMAIL_HOST,
            port=ApplicationConfig.EMAIL_PORT,
            username=ApplicationConfig.EMAIL_USERNAME,
            password=ApplicationConfig.EMAIL_PASSWORD,
            from_address=ApplicationConfig.EMAIL_FROM,
            from_name=ApplicationConfig.EMAIL_FROM_NAME,
            use_tls=ApplicationConfig.EMAIL_USE_TLS,
        )
    if ApplicationConfig.EMAIL_BACKEND == "console":
        return ConsoleEmailService(
            from_address=ApplicationConfig.EMAIL_FROM,
            from_name=ApplicationConfig.EMAIL_FROM_NAME,
        )
    raise ValueError(f"Unknown EMAIL_BACKEND: {ApplicationConfig.EMAIL_BACKEND}")


def create_app(ApplicationConfig) -> FastAPI:
    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.DB_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await engine.dispose()

    app = FastAPI(title="Natours Auth API", version="0.1.0", lifespan=lifespan)

    # Process-wide, read-only after startup
    app.state.config = ApplicationConfig
    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.token_issuer = SessionTokenIssuer(
        ApplicationConfig.JWT_SECRET,
        timedelta(days=ApplicationConfig.JWT_EXPIRES_IN_DAYS),
    )
    app.state.email_service = build_email_service(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, user, views

    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(user.router, prefix=ApplicationConfig.API_PREFIX, tags=["User"])
    app.include_router(views.router, tags=["Views"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(DependencyError, handle_dependency_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
