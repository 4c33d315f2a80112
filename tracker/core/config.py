from pydantic import BaseModel
from typing import Optional, List
import os


class Settings(BaseModel):
    """Application settings and configuration."""

    # Database (Supabase Postgres in production)
    database_url: str = "sqlite:///./tracker.db"

    # Supabase project endpoint and public access key
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None

    # API
    api_title: str = "Daily Task Tracker API"
    api_version: str = "0.1.0"
    api_description: str = "Task board, quick notes and rich notes for a single user workspace"

    # CORS
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Environment
    environment: str = "development"
    debug: bool = True

    # Authentication
    jwt_secret: Optional[str] = None
    jwt_audience: str = "authenticated"
    auth_dev_enabled: bool = False

    # Cookie settings
    session_cookie_name: str = "tracker_session"
    session_cookie_secure: bool = True
    session_cookie_samesite: str = "none"
    session_cookie_domain: Optional[str] = None

    # Workspace behaviour
    autosave_delay_seconds: float = 1.0
    warmup_delay_seconds: float = 0.1
    completed_page_size: int = 5
    display_timezone: str = "UTC"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        from dotenv import load_dotenv

        # Load .env.local first, then .env (if they exist)
        load_dotenv(".env.local", override=True)
        load_dotenv(".env", override=False)
        cors_origins_str = os.getenv("CORS_ORIGINS", "")
        if cors_origins_str:
            cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]
        else:
            # Default origins for the Vite dev server
            cors_origins = [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
                "http://127.0.0.1:3000"
            ]

        return cls(
            database_url=os.getenv("DATABASE_URL") or os.getenv("SUPABASE_DB_URL") or "sqlite:///./tracker.db",
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or None,
            api_title=os.getenv("API_TITLE", "Daily Task Tracker API"),
            api_version=os.getenv("API_VERSION", "0.1.0"),
            api_description=os.getenv("API_DESCRIPTION", "Task board, quick notes and rich notes for a single user workspace"),
            cors_origins=cors_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            environment=os.getenv("ENVIRONMENT", "development"),
            debug=os.getenv("DEBUG", "true").lower() == "true",
            jwt_secret=os.getenv("SUPABASE_JWT_SECRET") or os.getenv("JWT_SECRET") or None,
            jwt_audience=os.getenv("JWT_AUDIENCE", "authenticated"),
            auth_dev_enabled=os.getenv("AUTH_DEV_ENABLED", "false").lower() == "true",
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "tracker_session"),
            session_cookie_secure=os.getenv("SESSION_COOKIE_SECURE", "true").lower() == "true",
            session_cookie_samesite=os.getenv("SESSION_COOKIE_SAMESITE", "none"),
            session_cookie_domain=os.getenv("SESSION_COOKIE_DOMAIN") or None,
            autosave_delay_seconds=float(os.getenv("AUTOSAVE_DELAY_SECONDS", "1.0")),
            warmup_delay_seconds=float(os.getenv("WARMUP_DELAY_SECONDS", "0.1")),
            completed_page_size=int(os.getenv("COMPLETED_PAGE_SIZE", "5")),
            display_timezone=os.getenv("DISPLAY_TIMEZONE", "UTC"),
        )


# Global settings instance
settings = Settings.from_env()
