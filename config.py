"""
Central settings for the Trivia Time API service.

ASSUMPTIONS / CHECK:
- Values come from the environment or a local `.env` (pydantic-settings).
- Malformed values fail at import with the offending field named.
- Data paths default to the JSON bundle shipped in `data/` next to this file,
  or the copy installed under `<prefix>/share/trivia-time` for wheel installs.
- Limit bounds are fixed by the public API contract; they are not env-driven.
"""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent
INSTALLED_DATA_DIR = Path("share") / "trivia-time"


def default_data_dir(base_dir: Path = BASE_DIR, prefix: str = sys.prefix) -> Path:
    """Source checkout / editable install first, then the installed data-files copy."""
    local = base_dir / "data"
    if local.is_dir():
        return local
    return Path(prefix) / INSTALLED_DATA_DIR


DATA_DIR = default_data_dir()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    service_name: str = "Trivia Time API"
    description: str = "Trivia Time API Documentation"
    version: str = "1.0.0"

    # Bundled data (read once at startup)
    categories_path: Path = Field(DATA_DIR / "categories.json", validation_alias="TRIVIA_CATEGORIES_PATH")
    trivia_path: Path = Field(DATA_DIR / "trivia.json", validation_alias="TRIVIA_QUESTIONS_PATH")

    # Fail fast on dangling category refs / answers that are not an option id
    validate_dataset: bool = Field(True, validation_alias="TRIVIA_VALIDATE_DATASET")

    # None => OS entropy. Set for reproducible shuffles in demos.
    shuffle_seed: Optional[int] = Field(None, validation_alias="TRIVIA_SHUFFLE_SEED")

    # Query bounds for /v1/trivia
    default_limit: int = 10
    min_limit: int = 1
    max_limit: int = 50

    # HTTP surface
    cors_origins: Annotated[List[str], NoDecode] = Field(["*"], validation_alias="TRIVIA_CORS_ORIGINS")
    docs_url: str = Field("/docs", validation_alias="TRIVIA_DOCS_URL")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3000, validation_alias="PORT")

    log_level: str = Field("INFO", validation_alias="LOGLEVEL")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


settings = Settings()
