"""Pydantic Settings model for the GitHub Actions runner environment."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from affected_labeler.utils.constants import DEFAULT_GITHUB_API_URL


class RunnerEnvironment(BaseSettings):
    """Environment variables set by the GitHub Actions runner for every job."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_REPOSITORY: str | None = None
    GITHUB_EVENT_NAME: str | None = None
    GITHUB_EVENT_PATH: Path | None = None
    GITHUB_SHA: str | None = None
    GITHUB_WORKSPACE: Path | None = None
