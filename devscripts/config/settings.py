from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import AWS_DEFAULT_REGION, CLONE_LIST_FILENAME

# Load .env once, early
load_dotenv()

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="", env_file=None, extra="ignore")

    claude_skills_dir: Path = Field(default_factory=lambda: Path.home() / ".claude" / "skills")
    default_clone_file: Path = Field(default=DATA_DIR / CLONE_LIST_FILENAME)
    debug: bool = False
    aws_default_region: str = AWS_DEFAULT_REGION

    @field_validator("debug", mode="before")
    @classmethod
    def _numeric_debug(cls, v):
        # any non-zero number enables debug output, as in DEBUG=2
        if isinstance(v, str):
            try:
                return int(v) != 0
            except ValueError:
                return v
        return v


def get_settings() -> Settings:
    return Settings()
