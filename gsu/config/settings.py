from __future__ import annotations

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import DEFAULT_DEPTH, DEFAULT_GIT_BIN, DEFAULT_JOBS, DEFAULT_REMOTE, ENV_PREFIX


class Settings(BaseSettings):
    """Application config (env or .env), every variable prefixed with GSU_."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=None, extra="ignore")

    git_bin: str = Field(default=DEFAULT_GIT_BIN)
    remote: str = Field(default=DEFAULT_REMOTE, min_length=1)
    jobs: int = Field(default=DEFAULT_JOBS, ge=1)
    depth: int = Field(default=DEFAULT_DEPTH, ge=1)
    git_timeout: float | None = Field(default=None, gt=0)


def get_settings() -> Settings:
    # .env is looked up from the working directory upwards; real env vars win over it
    return Settings(_env_file=find_dotenv(usecwd=True) or None)
