import pytest
from pydantic import ValidationError

from config import Settings


def test_keyword_match_mode_defaults_to_substring():
    assert Settings().keyword_match_mode == "substring"


def test_keyword_match_mode_accepts_word(monkeypatch):
    monkeypatch.setenv("KEYWORD_MATCH_MODE", "word")
    assert Settings().keyword_match_mode == "word"


def test_unknown_keyword_match_mode_rejected_at_startup(monkeypatch):
    monkeypatch.setenv("KEYWORD_MATCH_MODE", "Word")
    with pytest.raises(ValidationError):
        Settings()


def test_unknown_keyword_match_mode_rejected_on_assignment():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.keyword_match_mode = "Word"
    assert settings.keyword_match_mode == "substring"
