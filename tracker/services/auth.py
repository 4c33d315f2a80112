"""Session token verification against the external auth provider (Supabase Auth)."""
import jwt
import httpx
import uuid
from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone

from tracker.core import settings, get_logger

logger = get_logger(__name__)


class AuthService:
    """Resolves access tokens to users and mints local development tokens."""

    def __init__(self):
        self.jwt_secret = settings.jwt_secret
        self.audience = settings.jwt_audience
        self.supabase_url = settings.supabase_url.rstrip("/") if settings.supabase_url else None
        self.supabase_anon_key = settings.supabase_anon_key

        if not self.jwt_secret and not (self.supabase_url and self.supabase_anon_key):
            logger.warning("Neither a JWT secret nor a Supabase endpoint is configured; all requests will be anonymous")

    @staticmethod
    def normalize_user(claims: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Map token claims or a Supabase user object to our user dict."""
        user_id = claims.get("sub") or claims.get("id")
        if not user_id:
            return None
        return {
            "user_id": str(user_id),
            "email": claims.get("email"),
        }

    def verify_session_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode an HS256 access token signed with the project secret."""
        if not self.jwt_secret:
            return None

        try:
            return jwt.decode(
                token,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=self.audience,
                options={"leeway": 60}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Session token expired")
            return None
        except jwt.InvalidTokenError:
            logger.warning("Invalid session token")
            return None

    async def fetch_supabase_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Ask Supabase Auth who owns the token."""
        if not (self.supabase_url and self.supabase_anon_key):
            return None

        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(
                    f"{self.supabase_url}/auth/v1/user",
                    headers={
                        "apikey": self.supabase_anon_key,
                        "Authorization": f"Bearer {token}"
                    },
                    timeout=5
                )
                if response.status_code in (401, 403):
                    logger.warning("Supabase rejected the access token")
                    return None
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                logger.error(f"Failed to resolve user from Supabase: {e}")
                return None

    async def resolve_user(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Local verification when we hold the secret, otherwise a round trip."""
        if not token:
            return None
        if self.jwt_secret:
            claims = self.verify_session_token(token)
        else:
            claims = await self.fetch_supabase_user(token)
        return self.normalize_user(claims) if claims else None

    def create_dev_session_token(self, email: str) -> str:
        """Create a token for local development, shaped like a Supabase one."""
        if not self.jwt_secret:
            raise ValueError("JWT secret not configured")

        payload = {
            "sub": str(uuid.uuid5(uuid.NAMESPACE_DNS, email.lower())),
            "email": email,
            "aud": self.audience,
            "role": "authenticated",
            "exp": datetime.now(timezone.utc) + timedelta(days=7),
        }
        return jwt.encode(payload, self.jwt_secret, algorithm="HS256")

    def get_cookie_settings(self) -> Dict[str, Any]:
        """Get cookie settings appropriate for the current environment."""
        is_local = settings.environment.lower() in ["development", "local"]

        cookie_settings = {
            "httponly": True,
            "max_age": 7 * 24 * 60 * 60,  # 7 days
            "path": "/"
        }

        if is_local:
            # Local development over HTTP
            cookie_settings["samesite"] = "lax"
            cookie_settings["secure"] = False
        else:
            cookie_settings["samesite"] = settings.session_cookie_samesite
            cookie_settings["secure"] = settings.session_cookie_secure
            if settings.session_cookie_domain:
                cookie_settings["domain"] = settings.session_cookie_domain

        return cookie_settings
