"""Centralized configuration — all env vars in one place."""

import os

# Upstream static file host. Fixed at build time, not read from the environment.
UPSTREAM_BASE_URL = "https://raw.githubusercontent.com/BRSolanki/newbShaderTestApp/main"

SHADER_LIST_PATH = "/shader-list-testing.json"
DEVELOPER_INDEX_PATH = "/developer-list-testing.json"
DEVELOPER_DIR = "/developers"

CACHE_TTL_SECONDS = 5 * 60


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = _int_env("PORT", 3000)

        # Upstream
        self.upstream_timeout: float = _float_env("UPSTREAM_TIMEOUT", 10.0)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of env vars that were set but could not be parsed."""
        problems = []
        for var, parse in (("PORT", int), ("UPSTREAM_TIMEOUT", float)):
            raw = os.getenv(var)
            if raw is None:
                continue
            try:
                parse(raw)
            except ValueError:
                problems.append(f"{var}={raw!r}")
        return problems


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.getenv(name, default))
    except ValueError:
        return default
    return value if value > 0 else default


settings = Settings()
