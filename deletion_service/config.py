from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_STATIC_DIR = Path(__file__).parent / "static"


class AppConfig(BaseSettings):
    """
    Application configuration settings loaded from environment variables.
    Provides validation and type casting for all settings.
    """

    service_name: str = Field(default="fb-data-deletion", alias="SERVICE_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    json_logs: bool = Field(default=False, alias="JSON_LOGS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    # Trusted proxies for X-Forwarded-Proto/Host; Facebook only calls https URLs.
    forwarded_allow_ips: str = Field(default="127.0.0.1", alias="FORWARDED_ALLOW_IPS")

    privacy_policy_url: str = Field(
        default="/privacy-policy.html", alias="PRIVACY_POLICY_URL"
    )
    static_dir: Path | None = Field(default=None, alias="STATIC_DIR")
    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    simulated_deletion_delay_scale: float = Field(
        default=1.0, ge=0, alias="SIMULATED_DELETION_DELAY_SCALE"
    )
    simulated_deletion_failures: list[str] = Field(
        default_factory=list, alias="SIMULATED_DELETION_FAILURES"
    )

    otel_enabled: bool = Field(default=False, alias="OTEL_ENABLED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def resolved_static_dir(self) -> Path:
        return self.static_dir or BUNDLED_STATIC_DIR
