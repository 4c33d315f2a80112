"""Authentication endpoints and the current-user dependency."""
from fastapi import APIRouter, Request, Response, HTTPException, Depends
from typing import Optional, Dict, Any
from pydantic import BaseModel

from tracker.services.auth import AuthService
from tracker.core import settings, get_logger

logger = get_logger(__name__)
router = APIRouter()


class DevLoginRequest(BaseModel):
    email: str


# Global auth service instance (initialized lazily)
auth_service = None


def get_auth_service() -> AuthService:
    """Get or create auth service instance."""
    global auth_service
    if auth_service is None:
        auth_service = AuthService()
    return auth_service


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return request.cookies.get(settings.session_cookie_name)


# Dependency for authenticated routes
async def get_current_user_dep(request: Request) -> Dict[str, Any]:
    """Dependency to get the current authenticated user."""
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = await get_auth_service().resolve_user(token)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return user


@router.post("/dev-login")
async def dev_login(payload: DevLoginRequest, response: Response):
    """Development-only login endpoint for local testing."""
    if not settings.auth_dev_enabled:
        raise HTTPException(status_code=404, detail="Not found")

    try:
        auth_svc = get_auth_service()
        session_token = auth_svc.create_dev_session_token(payload.email)
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session_token,
            **auth_svc.get_cookie_settings()
        )
    except Exception as e:
        logger.error(f"Dev login failed: {e}")
        raise HTTPException(status_code=500, detail="Development login failed")

    logger.info(f"Dev login successful for: {payload.email}")
    return {"status": "success", "access_token": session_token}


@router.get("/me")
async def get_current_user(current_user: Dict[str, Any] = Depends(get_current_user_dep)):
    """Get current authenticated user information."""
    return {"id": current_user["user_id"], "email": current_user.get("email")}


@router.post("/logout")
@router.get("/logout")
async def logout(response: Response):
    """Logout user by clearing session cookie."""
    cookie_settings = get_auth_service().get_cookie_settings()
    cookie_settings["max_age"] = 0

    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        **cookie_settings
    )

    logger.info("User logged out")
    return {"status": "logged_out"}
