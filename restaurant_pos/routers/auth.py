"""
Demo admin login.

A single hardcoded credential pair guards the dashboard. A successful login
sets an opaque session cookie; the route gate only checks that it is present.
"""

import logging
import secrets
import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from restaurant_pos.config import settings
from restaurant_pos.routers.deps import request_id
from restaurant_pos.schemas.auth import AuthResponse, LoginRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _new_session_token() -> str:
    return f"admin_{int(time.time() * 1000)}_{secrets.token_urlsafe(8)}"


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, request: Request) -> JSONResponse:
    if body.email != settings.demo_email or body.password != settings.demo_password:
        logger.warning(
            "Rejected admin login",
            extra={"request_id": request_id(request), "email": body.email},
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Invalid email or password"},
        )

    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=AuthResponse(success=True, message="Login successful").model_dump(),
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=_new_session_token(),
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    logger.info("Admin logged in", extra={"request_id": request_id(request)})
    return response


@router.post("/logout", response_model=AuthResponse)
async def logout(request: Request) -> JSONResponse:
    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=AuthResponse(success=True, message="Logout successful").model_dump(),
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    logger.info("Admin logged out", extra={"request_id": request_id(request)})
    return response
