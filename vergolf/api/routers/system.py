"""System-level API endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

router = APIRouter(tags=["system"])

# Messages shown on the login screen after a failed provider round trip.
LOGIN_ERROR_MESSAGES: Dict[str, str] = {
    "oauth_failed": "การเข้าสู่ระบบล้มเหลว กรุณาลองอีกครั้ง",
    "oauth_cancelled": "คุณยกเลิกการเข้าสู่ระบบ",
    "no_code": "ไม่พบรหัสยืนยันจาก AIVerID",
}
DEFAULT_LOGIN_ERROR = "เกิดข้อผิดพลาด กรุณาลองอีกครั้ง"


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/login/errors/{code}")
def login_error_message(code: str) -> Dict[str, str]:
    return {"code": code, "message": LOGIN_ERROR_MESSAGES.get(code, DEFAULT_LOGIN_ERROR)}


__all__ = ["DEFAULT_LOGIN_ERROR", "LOGIN_ERROR_MESSAGES", "router"]
