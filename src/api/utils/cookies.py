from datetime import UTC, datetime, timedelta

from fastapi import Request, Response

LOGGED_OUT_SENTINEL = "loggedout"


def is_secure_request(request: Request) -> bool:
    """TLS terminated here, or at a proxy that sets X-Forwarded-Proto"""
    if request.url.scheme == "https":
        return True
    return request.headers.get("x-forwarded-proto", "").lower() == "https"


def set_session_cookie(response: Response, request: Request, token: str, config) -> None:
    response.set_cookie(
        config.JWT_COOKIE_NAME,
        token,
        expires=datetime.now(UTC) + timedelta(days=config.JWT_COOKIE_EXPIRES_IN_DAYS),
        httponly=True,
        secure=is_secure_request(request),
    )


def clear_session_cookie(response: Response, config) -> None:
    """
    Overwrite the session cookie with a sentinel that expires in 10 seconds.

    This is not revocation: a token already copied out of the cookie stays
    valid until its own expiry.
    """
    response.set_cookie(
        config.JWT_COOKIE_NAME,
        LOGGED_OUT_SENTINEL,
        expires=datetime.now(UTC) + timedelta(seconds=10),
        httponly=True,
    )
