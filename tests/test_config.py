import pytest

from code_reviewer.config import DEFAULT_MAX_TOKENS, load_settings
from code_reviewer.errors import ConfigError


def test_defaults_to_anthropic():
    settings = load_settings(env={"ANTHROPIC_API_KEY": "sk-ant"})
    assert settings.provider == "anthropic"
    assert settings.api_key == "sk-ant"
    assert settings.max_tokens == DEFAULT_MAX_TOKENS


def test_provider_selects_key_and_model():
    env = {
        "CODE_REVIEWER_PROVIDER": "OpenAI",
        "OPENAI_API_KEY": "sk-oai",
        "ANTHROPIC_API_KEY": "sk-ant",
    }
    settings = load_settings(env=env)
    assert settings.provider == "openai"
    assert settings.api_key == "sk-oai"
    assert settings.model == "gpt-4.1-mini"


def test_explicit_arguments_win():
    env = {"CODE_REVIEWER_MODEL": "from-env", "CODE_REVIEWER_MAX_TOKENS": "200"}
    settings = load_settings(env=env, provider="openai", model="from-flag")
    assert settings.provider == "openai"
    assert settings.model == "from-flag"
    assert settings.max_tokens == 200
    assert settings.api_key is None


def test_invalid_values():
    with pytest.raises(ConfigError, match="Unknown provider"):
        load_settings(env={"CODE_REVIEWER_PROVIDER": "gemini"})
    with pytest.raises(ConfigError, match="CODE_REVIEWER_MAX_TOKENS"):
        load_settings(env={"CODE_REVIEWER_MAX_TOKENS": "lots"})
