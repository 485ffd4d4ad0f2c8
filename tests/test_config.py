import pytest

from receipt_extract.config import load_settings, Settings

ENV_VARS = [
    "OUTPUT_PATH", "DEBUG_DIR", "SAVE_DEBUG", "LOG_LEVEL", "OCR_LANG", "TESSERACT_CMD",
    "MAX_WIDTH", "MIN_WIDTH", "DO_THRESHOLD", "TOTAL_STRATEGY", "DATE_DAYFIRST",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s == Settings()
    assert s.total_strategy == "first"
    assert s.tesseract_cmd is None
    assert s.ocr_lang == "eng"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TOTAL_STRATEGY", " Largest ")
    monkeypatch.setenv("MAX_WIDTH", "2000")
    monkeypatch.setenv("DO_THRESHOLD", "1")
    monkeypatch.setenv("DATE_DAYFIRST", "1")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("TESSERACT_CMD", "/opt/tesseract")
    s = load_settings()
    assert s.total_strategy == "largest"
    assert s.max_width == 2000
    assert s.do_threshold is True
    assert s.date_dayfirst is True
    assert s.log_level == "DEBUG"
    assert s.tesseract_cmd == "/opt/tesseract"


def test_bad_strategy(monkeypatch):
    monkeypatch.setenv("TOTAL_STRATEGY", "median")
    with pytest.raises(ValueError, match="total strategy"):
        load_settings()


def test_bad_width(monkeypatch):
    monkeypatch.setenv("MAX_WIDTH", "wide")
    with pytest.raises(ValueError, match="MAX_WIDTH"):
        load_settings()


def test_min_above_max(monkeypatch):
    monkeypatch.setenv("MAX_WIDTH", "500")
    with pytest.raises(ValueError, match="MIN_WIDTH"):
        load_settings()
