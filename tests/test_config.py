from pathlib import Path

import pytest
from pydantic import ValidationError

from config import INSTALLED_DATA_DIR, Settings, default_data_dir


ENV_NAMES = [
    "TRIVIA_CATEGORIES_PATH", "TRIVIA_QUESTIONS_PATH", "TRIVIA_VALIDATE_DATASET",
    "TRIVIA_SHUFFLE_SEED", "TRIVIA_CORS_ORIGINS", "TRIVIA_DOCS_URL", "HOST", "PORT", "LOGLEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def _settings() -> Settings:
    return Settings(_env_file=None)


def test_defaults():
    s = _settings()
    assert s.validate_dataset is True
    assert s.shuffle_seed is None
    assert s.cors_origins == ["*"]
    assert s.port == 3000
    assert s.docs_url == "/docs"
    assert (s.default_limit, s.min_limit, s.max_limit) == (10, 1, 50)


def test_env_values_are_parsed(monkeypatch, tmp_path):
    monkeypatch.setenv("TRIVIA_VALIDATE_DATASET", "false")
    monkeypatch.setenv("TRIVIA_SHUFFLE_SEED", "7")
    monkeypatch.setenv("TRIVIA_CORS_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("TRIVIA_QUESTIONS_PATH", str(tmp_path / "trivia.csv"))
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOGLEVEL", "debug")
    s = _settings()
    assert s.validate_dataset is False
    assert s.shuffle_seed == 7
    assert s.cors_origins == ["https://a.example", "https://b.example"]
    assert s.trivia_path == tmp_path / "trivia.csv"
    assert s.port == 8080
    assert s.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("TRIVIA_SHUFFLE_SEED", "")
    monkeypatch.setenv("TRIVIA_VALIDATE_DATASET", "")
    s = _settings()
    assert s.shuffle_seed is None
    assert s.validate_dataset is True


def test_misspelled_bool_is_rejected(monkeypatch):
    monkeypatch.setenv("TRIVIA_VALIDATE_DATASET", "ture")
    with pytest.raises(ValidationError, match="(?i)trivia_validate_dataset"):
        _settings()


@pytest.mark.parametrize("name, value", [("PORT", "http"), ("TRIVIA_SHUFFLE_SEED", "abc")])
def test_malformed_int_names_the_field(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError, match=f"(?i){name}"):
        _settings()


def test_dotenv_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TRIVIA_DOCS_URL=https://docs.example/trivia\n", encoding="utf-8")
    assert Settings(_env_file=env_file).docs_url == "https://docs.example/trivia"


def test_default_data_dir_prefers_source_checkout(tmp_path):
    (tmp_path / "data").mkdir()
    assert default_data_dir(base_dir=tmp_path, prefix="/unused") == tmp_path / "data"


def test_default_data_dir_falls_back_to_installed_copy(tmp_path):
    prefix = tmp_path / "venv"
    assert default_data_dir(base_dir=tmp_path, prefix=str(prefix)) == prefix / INSTALLED_DATA_DIR


def test_installed_data_files_match_bundle():
    text = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
    assert '"share/trivia-time" = ["data/categories.json", "data/trivia.json"]' in text
    assert INSTALLED_DATA_DIR == Path("share") / "trivia-time"
