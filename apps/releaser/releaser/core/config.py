from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from environment variables.

    GITHUB_TOKEN and GITHUB_EVENT_PATH are the names GitHub Actions already
    exports to every job, so a matrix runner needs no extra wiring.

    The token is held as a SecretStr so it never shows up in a repr or in
    a structured log line by accident.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub
    github_token: SecretStr = SecretStr("")
    github_event_path: Optional[Path] = None

    # Build
    binary_name: str = ""
    source_dir: Path = Path(".")
    # Empty WORKSPACE_ROOT means a fresh temporary directory per job.
    workspace_root: Optional[Path] = Path(".releaser")
    build_command: str = "cargo build --release"

    # Timeouts (seconds)
    bootstrap_timeout: int = 900
    build_timeout: int = 3600
    upload_timeout: float = 300.0

    # App
    debug: bool = False

    @field_validator("github_event_path", "workspace_root", mode="before")
    @classmethod
    def empty_path_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class Credential:
    """The upload token for one job invocation.

    Built once from Settings and handed to the publisher explicitly.
    Never persisted; repr is masked.
    """

    token: str = field(repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credential":
        return cls(token=settings.github_token.get_secret_value().strip())

    @property
    def is_present(self) -> bool:
        return bool(self.token)

    def __repr__(self) -> str:
        return f"Credential(token={'***' if self.token else '<missing>'})"
