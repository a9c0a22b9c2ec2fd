# portal/config.py
import os
from pathlib import Path
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

PACKAGE_DIR = Path(__file__).resolve().parent

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Team Portal API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend (comma separated in env)
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        ).split(",") if o.strip()
    ]

    # Session token settings
    # No default secret: auth operations fail closed when it is missing
    jwt_secret: str | None = os.getenv("JWT_SECRET") or None
    jwt_alg: str = "HS256"
    session_ttl_hours: int = int(os.getenv("SESSION_TTL_HOURS", "24"))
    auth_cookie_name: str = os.getenv("AUTH_COOKIE_NAME", "auth")

    # Store settings
    database_url: str = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
    # Only for local development; use Aerich migrations otherwise
    db_generate_schemas: bool = os.getenv("DB_GENERATE_SCHEMAS", "false").lower() in ("true", "1", "yes")

    # Argon2 time cost (slow hash work factor)
    password_hash_rounds: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "4"))

    # Static collaborators
    pages_dir: Path = Path(os.getenv("PAGES_DIR", str(PACKAGE_DIR / "pages")))
    teams_file: Path = Path(os.getenv("TEAMS_FILE", str(PACKAGE_DIR / "teams.json")))

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def session_max_age(self) -> int:
        """Cookie max-age in seconds, aligned with the token expiry."""
        return self.session_ttl_hours * 60 * 60

settings = Settings()  # Instantiate configuration
