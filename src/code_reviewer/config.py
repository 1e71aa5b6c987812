"""
Settings for the analysis service.

Values come from the process environment (optionally populated from a `.env`
file by the CLI via python-dotenv). Library code never reads the environment
on its own: build a `Settings` once and pass it to `CodeAnalyzer`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

PROVIDERS = {
    # provider -> (api key variable, default model)
    "anthropic": ("ANTHROPIC_API_KEY", "claude-3-5-sonnet-latest"),
    "openai": ("OPENAI_API_KEY", "gpt-4.1-mini"),
}
DEFAULT_PROVIDER = "anthropic"
DEFAULT_MAX_TOKENS = 1500


@dataclass(slots=True)
class Settings:
    provider: str = DEFAULT_PROVIDER
    model: str = PROVIDERS[DEFAULT_PROVIDER][1]
    api_key: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = 0.2

    @property
    def api_key_var(self) -> str:
        return PROVIDERS[self.provider][0]


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> Settings:
    """Build Settings from `env` (defaults to os.environ); explicit args win."""
    env = os.environ if env is None else env
    provider = (provider or env.get("CODE_REVIEWER_PROVIDER") or DEFAULT_PROVIDER).lower()
    if provider not in PROVIDERS:
        known = ", ".join(sorted(PROVIDERS))
        raise ConfigError(f"Unknown provider {provider!r} (expected one of: {known})")
    key_var, default_model = PROVIDERS[provider]
    return Settings(
        provider=provider,
        model=model or env.get("CODE_REVIEWER_MODEL") or default_model,
        api_key=env.get(key_var) or None,
        max_tokens=_int_var(env, "CODE_REVIEWER_MAX_TOKENS", DEFAULT_MAX_TOKENS),
    )
