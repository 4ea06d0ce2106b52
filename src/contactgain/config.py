from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3100
    debug: bool = False
    session_secret_key: str  # Signs the per-browser cookie (browser identifier and submitted markers)
    cors_origins: list[str] = []
    retention_hours: int = 5  # Download window length after submissions close
    cleanup_interval_seconds: int = 15 * 60
    status_tick_seconds: float = 1.0
    vcf_base_label: str = "CIPHER"  # Prefix of downloaded .vcf file names
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "CONTACTGAIN_",
        "extra": "ignore",
    }
