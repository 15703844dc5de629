"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from auth.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import envelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────
# Fields are optional here; AuthService validates them in a fixed order
# so the client gets the first failing rule, not a pydantic error list.


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Register a new user."""
    result = await auth.register(req.name, req.email, req.password)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=envelope(201, result.model_dump(), "Registration successful"),
    )


@router.post("/login")
async def login(
    req: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await auth.login(req.email, req.password)
    return envelope(200, result.model_dump(), "Login successful")
