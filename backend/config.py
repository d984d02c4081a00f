import os
from typing import Literal

from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    database_path: str = "data/talent_ai.db"
    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # External profile lookup
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = 10.0
    github_synthetic_metrics: bool = True  # random stars/contributions, tagged as synthetic

    # Keyword matching for skills and job requirements
    keyword_match_mode: Literal["substring", "word"] = "substring"

    # Submission rate limiting
    rate_limit_enabled: bool = True
    submit_rate_limit: str = "10/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "validate_assignment": True}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
