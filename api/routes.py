"""
Service-level routes (health).
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from utils.schemas import envelope

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    return envelope(200, {"status": "ok"}, "API is running")
