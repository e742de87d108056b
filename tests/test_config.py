import pytest
import pytz

import config


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_int_from_env_falls_back_on_bad_values(monkeypatch, raw):
    monkeypatch.setenv("TICKER_TEST_INT", raw)
    assert config._int_from_env("TICKER_TEST_INT", 7) == 7


def test_int_from_env_reads_positive_values(monkeypatch):
    monkeypatch.setenv("TICKER_TEST_INT", "12")
    assert config._int_from_env("TICKER_TEST_INT", 7) == 12


def test_int_from_env_unset_uses_default(monkeypatch):
    monkeypatch.delenv("TICKER_TEST_INT", raising=False)
    assert config._int_from_env("TICKER_TEST_INT", 7) == 7


@pytest.mark.parametrize("raw, expected", [("0.25", 0.25), ("nope", 0.5), ("0", 0.5)])
def test_float_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("TICKER_TEST_FLOAT", raw)
    assert config._float_from_env("TICKER_TEST_FLOAT", 0.5) == expected


def test_optional_path_expands_user(monkeypatch):
    monkeypatch.setenv("HOME", "/home/ticker")
    monkeypatch.setenv("TICKER_TEST_PATH", "  ~/frame.png ")
    assert config._optional_path_from_env("TICKER_TEST_PATH") == "/home/ticker/frame.png"

    monkeypatch.setenv("TICKER_TEST_PATH", "   ")
    assert config._optional_path_from_env("TICKER_TEST_PATH") is None


def test_unknown_timezone_falls_back():
    assert config._load_timezone("Mars/Olympus_Mons") == pytz.timezone("America/New_York")
