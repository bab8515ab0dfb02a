import pytest

from subnet import config
from subnet.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_EXPAND,
    SubnetConfig,
    get_config,
    load_env_file,
    set_config,
)


@pytest.fixture
def no_env_files(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "ENV_LOCATIONS", [tmp_path / ".env"])
    return tmp_path / ".env"


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so the delete is undone back to the caller's original state
    for name in ("SUBNET_MAX_EXPAND", "SUBNET_LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(no_env_files, clean_env):
    cfg = SubnetConfig.from_env()
    assert cfg.max_expand == DEFAULT_MAX_EXPAND
    assert cfg.log_level == DEFAULT_LOG_LEVEL


def test_from_environment(no_env_files, clean_env, monkeypatch):
    monkeypatch.setenv("SUBNET_MAX_EXPAND", "4096")
    monkeypatch.setenv("SUBNET_LOG_LEVEL", "debug")
    cfg = SubnetConfig.from_env()
    assert cfg.max_expand == 4096
    assert cfg.log_level == "DEBUG"


def test_from_env_file(no_env_files, clean_env):
    no_env_files.write_text("SUBNET_MAX_EXPAND=99\nSUBNET_LOG_LEVEL=INFO\n")
    assert load_env_file() == no_env_files
    cfg = SubnetConfig.from_env()
    assert cfg.max_expand == 99
    assert cfg.log_level == "INFO"


def test_environment_wins_over_env_file(no_env_files, clean_env, monkeypatch):
    no_env_files.write_text("SUBNET_MAX_EXPAND=99\n")
    monkeypatch.setenv("SUBNET_MAX_EXPAND", "7")
    assert SubnetConfig.from_env().max_expand == 7


def test_missing_env_file(no_env_files):
    assert load_env_file() is None


def test_get_config_is_cached(no_env_files, clean_env):
    set_config(None)
    first = get_config()
    assert get_config() is first
    assert first.max_expand == DEFAULT_MAX_EXPAND


def test_set_config():
    cfg = SubnetConfig(max_expand=3)
    set_config(cfg)
    assert get_config() is cfg
