"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # AzuraCast upstream
        self.azuracast_base_url: str = os.getenv("AZURACAST_BASE_URL", "https://demo.azuracast.com")
        self.azuracast_station_id: str = os.getenv("AZURACAST_STATION_ID", "1")
        self.azuracast_api_key: str | None = os.getenv("AZURACAST_API_KEY") or None

        self.cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", "60"))
        self.upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

        # Bearer tokens are issued by the auth service; we only verify them
        self.jwt_secret: str | None = os.getenv("JWT_SECRET") or None
        self.jwt_issuer: str | None = os.getenv("JWT_ISSUER") or None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing env vars needed for authenticated routes."""
        required = ["JWT_SECRET"]
        return [var for var in required if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "JWT_SECRET": "jwt_secret",
    }
    return mapping.get(env_var, env_var.lower())
