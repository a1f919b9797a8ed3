import logging
from pathlib import Path

from dotenv import dotenv_values

from promptgate.config import Settings, load_settings, resolve_log_level


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.port == 8080
    assert settings.log_level == "info"
    assert settings.openai_api_key == ""
    assert settings.groq_api_key == ""
    assert settings.groq_url == "https://api.groq.com/openai/v1/responses"
    assert settings.chat_model == "openai/gpt-oss-20b"
    assert settings.gateway_api_url == "http://anyway:9889"
    assert settings.gateway_enabled is True
    assert settings.request_timeout == 120.0


def test_values_read_from_environment():
    settings = Settings.from_env(
        {
            "PORT": "9000",
            "LOG_LEVEL": "debug",
            "OPENAI_API_KEY": "sk-1",
            "CHAT_MODEL": "OpenAI",
            "GROQ_URL": "http://groq.local",
            "GATEWAY_ENABLED": "TRUE",
            "REQUEST_TIMEOUT_SECONDS": "7.5",
        }
    )

    assert settings.port == 9000
    assert settings.log_level == "debug"
    assert settings.openai_api_key == "sk-1"
    assert settings.chat_model == "OpenAI"
    assert settings.groq_url == "http://groq.local"
    assert settings.gateway_enabled is True
    assert settings.request_timeout == 7.5


def test_empty_values_fall_back_to_defaults():
    settings = Settings.from_env({"CHAT_MODEL": "", "GATEWAY_ENABLED": ""})
    assert settings.chat_model == "openai/gpt-oss-20b"
    assert settings.gateway_enabled is True


def test_only_literal_true_enables_gateway():
    assert Settings.from_env({"GATEWAY_ENABLED": "false"}).gateway_enabled is False
    assert Settings.from_env({"GATEWAY_ENABLED": "yes"}).gateway_enabled is False


def test_non_numeric_timeout_is_ignored():
    assert Settings.from_env({"REQUEST_TIMEOUT_SECONDS": "soon"}).request_timeout == 120.0


def test_non_numeric_port_falls_back_to_default():
    assert Settings.from_env({"PORT": "http"}).port == 8080


def test_log_level_resolution():
    assert resolve_log_level("DEBUG") == logging.DEBUG
    assert resolve_log_level("warn") == logging.WARNING
    assert resolve_log_level("panic") == logging.CRITICAL
    assert resolve_log_level("verbose") == logging.INFO


def test_load_settings_reads_dotenv_file(tmp_path, monkeypatch):
    # register the variable with monkeypatch so the value loaded from .env is undone
    monkeypatch.setenv("GROQ_API_KEY", "x")
    monkeypatch.delenv("GROQ_API_KEY")
    env_file = tmp_path / ".env"
    env_file.write_text("GROQ_API_KEY=from-dotenv\n")

    settings = load_settings(str(env_file))

    assert settings.groq_api_key == "from-dotenv"


def test_process_environment_wins_over_dotenv(tmp_path, monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "from-env")
    env_file = tmp_path / ".env"
    env_file.write_text("GROQ_API_KEY=from-dotenv\n")

    assert load_settings(str(env_file)).groq_api_key == "from-env"


def test_env_example_lists_every_setting():
    example = dotenv_values(Path(__file__).resolve().parents[1] / ".env.example")
    read_by_settings = {
        "PORT",
        "LOG_LEVEL",
        "OPENAI_API_KEY",
        "OPENAI_URL",
        "OPENAI_MODEL",
        "GROQ_API_KEY",
        "GROQ_URL",
        "CHAT_MODEL",
        "GATEWAY_API_URL",
        "GATEWAY_API_KEY",
        "GATEWAY_ENABLED",
        "REQUEST_TIMEOUT_SECONDS",
    }
    assert read_by_settings <= set(example)
