import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.auth import AuthGate, get_auth_gate, require_admin
from app.schemas import AuthStatus, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(
    payload: Optional[LoginRequest] = Body(default=None),
    gate: AuthGate = Depends(get_auth_gate),
):
    """
    Exchange the admin password for a bearer token valid for 24 hours.
    A missing body or password is just a wrong password: 401 {success: false}.
    """
    result = gate.login(payload.password if payload is not None else None)
    if not result.success:
        return JSONResponse(status_code=401, content={"success": False, "error": result.error})
    return LoginResponse(success=True, token=result.token)


@router.get("/check", response_model=AuthStatus)
def check(claims: dict = Depends(require_admin)):
    """Lets clients probe whether their token is still accepted."""
    return AuthStatus(authenticated=True)
