from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path
import logging

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of vocab_trainer directory)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=True)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=True)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Relational backend - empty means the local JSON store is used
    database_url: str = ""

    # 'sql' or 'local'; empty infers from database_url
    storage_backend: str = ""

    # Local fallback store
    local_store_path: str = "vocab_trainer_data.json"
    seed_default_data: bool = True

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Registration code that grants the admin role
    admin_invite_code: str = "SUPERNOVA-ADMIN-2025"

    # Time zone used for calendar-day review intervals
    timezone: str = "UTC"

    # Study-time accumulator tick
    study_tick_ms: int = 1000

    log_level: str = "INFO"
    environment: str = "production"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def resolved_backend(self) -> str:
        """Storage backend actually in use ('sql' or 'local')."""
        backend = self.storage_backend.strip().lower()
        if backend:
            return backend
        return "sql" if self.database_url else "local"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


# Create settings instance
settings = Settings()

# Validate backend choice
if settings.resolved_backend not in ("sql", "local"):
    raise ValueError(f"STORAGE_BACKEND must be 'sql' or 'local', got: {settings.storage_backend}")

if settings.resolved_backend == "sql" and not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required for the sql storage backend")
