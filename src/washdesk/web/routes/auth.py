from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from washdesk.auth import (
    LOGIN_PATH,
    RoleContext,
    current_role,
    get_current_user_id,
    hash_password,
    verify_password,
)
from washdesk.db import get_session
from washdesk.db.models import AdminRole, User
from washdesk.db.repos import UserRepository, UserRoleRepository
from washdesk.logging_config import log_with_fields
from washdesk.security.audit import audit_auth_denied, audit_auth_success
from washdesk.security.audit_constants import (
    AUTH_EVENT_LOGOUT,
    AUTH_EVENT_PASSWORD_LOGIN,
    AUTH_EVENT_SIGNUP,
    AUTH_REASON_ACCOUNT_EXISTS,
    AUTH_REASON_ACCOUNT_NOT_FOUND,
    AUTH_REASON_INVALID_CREDENTIALS,
)
from washdesk.settings import get_settings
from washdesk.web.routes.common import clean_text, redirect_to, templates

router = APIRouter()
logger = logging.getLogger("washdesk.auth")

SIGNED_IN_HOME = "/protected"


def is_bootstrap_superadmin_email(email: str) -> bool:
    configured = get_settings().bootstrap_superadmin_email
    if configured is None:
        return False
    return configured.strip().lower() == email.strip().lower()


async def maybe_grant_bootstrap_superadmin(user: User, session: AsyncSession) -> None:
    if not is_bootstrap_superadmin_email(user.email):
        return

    roles = UserRoleRepository(session)
    if await roles.get_role(user.id) == AdminRole.superadmin:
        return

    await roles.assign(user.id, AdminRole.superadmin)
    await roles.commit()
    log_with_fields(
        logger,
        logging.INFO,
        "bootstrap superadmin granted",
        user_id=user.id,
    )


def _render_login(request: Request, *, error: str | None, status_code: int = 200) -> Response:
    return templates.TemplateResponse(
        request,
        "login.html",
        {"error": error, "current_user": None, "email": ""},
        status_code=status_code,
    )


def _render_signup(
    request: Request,
    *,
    error: str | None,
    form: dict[str, str] | None = None,
    status_code: int = 200,
) -> Response:
    return templates.TemplateResponse(
        request,
        "signup.html",
        {
            "error": error,
            "current_user": None,
            "form": form or {"display_name": "", "email": ""},
        },
        status_code=status_code,
    )


@router.get("/", response_class=RedirectResponse)
async def index(request: Request) -> RedirectResponse:
    if get_current_user_id(request) is None:
        return redirect_to(LOGIN_PATH)
    return redirect_to(SIGNED_IN_HOME)


@router.get("/auth/login", response_class=Response)
async def login_form(
    request: Request,
    context: RoleContext = Depends(current_role),
) -> Response:
    if context.user is not None:
        return redirect_to(SIGNED_IN_HOME)
    return _render_login(request, error=None)


@router.post("/auth/login", response_class=HTMLResponse)
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    session: AsyncSession = Depends(get_session),
) -> Response:
    normalized_email = email.strip().lower()
    user = await UserRepository(session).get_by_email(normalized_email)

    if user is None:
        audit_auth_denied(
            event=AUTH_EVENT_PASSWORD_LOGIN,
            reason=AUTH_REASON_ACCOUNT_NOT_FOUND,
            actor_email=normalized_email,
        )
        return _render_login(request, error="Account not found. Sign up first.", status_code=401)

    if user.password_hash is None or not verify_password(password, user.password_hash):
        audit_auth_denied(
            event=AUTH_EVENT_PASSWORD_LOGIN,
            reason=AUTH_REASON_INVALID_CREDENTIALS,
            actor=user,
        )
        return _render_login(request, error="Invalid email or password", status_code=401)

    await maybe_grant_bootstrap_superadmin(user, session)

    request.session["user_id"] = str(user.id)
    audit_auth_success(event=AUTH_EVENT_PASSWORD_LOGIN, actor=user)
    return redirect_to(SIGNED_IN_HOME)


@router.get("/auth/sign-up", response_class=Response)
async def signup_form(
    request: Request,
    context: RoleContext = Depends(current_role),
) -> Response:
    if context.user is not None:
        return redirect_to(SIGNED_IN_HOME)
    return _render_signup(request, error=None)


@router.post("/auth/sign-up", response_class=HTMLResponse)
async def signup(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    display_name: str = Form(""),
    session: AsyncSession = Depends(get_session),
) -> Response:
    normalized_email = email.strip().lower()
    normalized_name = clean_text(display_name) or normalized_email.split("@", 1)[0]
    if not normalized_email:
        raise HTTPException(status_code=400, detail="Email is required")
    if not password:
        raise HTTPException(status_code=400, detail="Password is required")

    users = UserRepository(session)
    if await users.get_by_email(normalized_email) is not None:
        audit_auth_denied(
            event=AUTH_EVENT_SIGNUP,
            reason=AUTH_REASON_ACCOUNT_EXISTS,
            actor_email=normalized_email,
        )
        return _render_signup(
            request,
            error="Account already exists. Sign in instead.",
            form={"display_name": normalized_name, "email": normalized_email},
            status_code=400,
        )

    user = await users.add(
        User(
            email=normalized_email,
            display_name=normalized_name,
            password_hash=hash_password(password),
        )
    )
    await users.commit()
    await maybe_grant_bootstrap_superadmin(user, session)

    request.session["user_id"] = str(user.id)
    audit_auth_success(event=AUTH_EVENT_SIGNUP, actor=user)
    return redirect_to(SIGNED_IN_HOME)


@router.post("/auth/logout", response_class=RedirectResponse)
async def logout(request: Request) -> RedirectResponse:
    audit_auth_success(event=AUTH_EVENT_LOGOUT, actor_user_id=request.session.get("user_id"))
    request.session.clear()
    return redirect_to(LOGIN_PATH)


@router.get("/protected", response_class=Response)
async def protected(
    request: Request,
    context: RoleContext = Depends(current_role),
) -> Response:
    if context.user is None:
        return redirect_to(LOGIN_PATH)

    return templates.TemplateResponse(
        request,
        "protected.html",
        {
            "current_user": context.user,
            "role": context.role,
            "is_admin": context.is_admin,
        },
    )
