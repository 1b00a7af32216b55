"""
Centralized configuration for the course viewer.

Every accessor reads the environment at call time so tests can patch
os.environ without reloading modules.
"""

import json
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent


def is_dev_mode() -> bool:
    """Check if running in development mode (DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def is_production() -> bool:
    """Check if running in production (APP_ENV=production)."""
    return os.getenv("APP_ENV", "").lower() == "production"


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_frontend_url() -> str:
    """Get frontend URL used for CORS."""
    return os.environ.get("FRONTEND_URL", "http://localhost:3000").rstrip("/")


def get_allowed_origins() -> list[str]:
    """Get list of allowed CORS origins (localhost variants + FRONTEND_URL)."""
    hosts = ["localhost", "127.0.0.1"]
    ports = [3000, get_api_port()]
    origins = [f"http://{host}:{port}" for host in hosts for port in ports]

    frontend_url = get_frontend_url()
    if frontend_url not in origins:
        origins.append(frontend_url)

    return origins


def get_data_dir() -> Path:
    """Directory holding courses.json and users.json."""
    return Path(os.environ.get("DATA_DIR", _PROJECT_ROOT / "data"))


def get_root_folder_id() -> str | None:
    """Google Drive folder whose children are the courses."""
    return os.environ.get("GOOGLE_FOLDER_ID") or None


def get_drive_credentials_info() -> dict | None:
    """
    Service account credentials for Google Drive.

    Supports, in order:
    - GOOGLE_DRIVE_CREDENTIALS_JSON env var (for Railway/Heroku)
    - GOOGLE_DRIVE_CREDENTIALS_FILE path (for local dev)
    - GOOGLE_CLIENT_EMAIL + GOOGLE_PRIVATE_KEY pair

    Returns None if none of them is configured.
    """
    raw_json = os.environ.get("GOOGLE_DRIVE_CREDENTIALS_JSON")
    if raw_json:
        return json.loads(raw_json)

    creds_file = os.environ.get("GOOGLE_DRIVE_CREDENTIALS_FILE")
    if creds_file and os.path.exists(creds_file):
        return json.loads(Path(creds_file).read_text())

    client_email = os.environ.get("GOOGLE_CLIENT_EMAIL")
    private_key = os.environ.get("GOOGLE_PRIVATE_KEY")
    if client_email and private_key:
        # Keys pasted into .env files carry literal "\n" sequences
        return {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key.replace("\\n", "\n"),
            "token_uri": "https://oauth2.googleapis.com/token",
        }

    return None


def get_session_secret() -> str | None:
    """Secret used to sign session cookies."""
    return os.environ.get("SESSION_SECRET") or None


def get_refresh_interval_minutes() -> int:
    """Minutes between scheduled course tree rebuilds (0 disables)."""
    return int(os.getenv("COURSE_REFRESH_INTERVAL_MINUTES", "60"))


def get_file_view_ttl_seconds() -> int:
    """Lifetime of a cached file view URL."""
    return int(os.getenv("FILE_VIEW_TTL_SECONDS", "1800"))


def get_sentry_dsn() -> str | None:
    return os.environ.get("SENTRY_DSN") or None


# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("GOOGLE_FOLDER_ID", "Root Google Drive folder holding the courses", True),
    ("SESSION_SECRET", "Secret key for session cookies", True),
    ("SENTRY_DSN", "Sentry error reporting", False),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Drive credentials count as set when any of the supported forms is present.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        if os.environ.get(name):
            continue
        if required_in_dev:
            errors.append(f"  ✗ {name}: Not set ({description})")
        elif not in_dev:
            warnings.append(f"  ⚠ {name}: Not set ({description})")

    has_credentials = (
        os.environ.get("GOOGLE_DRIVE_CREDENTIALS_JSON")
        or os.environ.get("GOOGLE_DRIVE_CREDENTIALS_FILE")
        or (os.environ.get("GOOGLE_CLIENT_EMAIL") and os.environ.get("GOOGLE_PRIVATE_KEY"))
    )
    if not has_credentials:
        errors.append("  ✗ Google Drive credentials: Not set (service account)")

    if errors:
        for error in errors:
            print(error)
        return False, warnings

    return True, warnings
