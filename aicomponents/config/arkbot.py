"""
aicomponents.config.arkbot – Ark bot chat endpoint config.

Env vars: ARK_API_KEY, ARK_BOT_ID, ARK_BASE_URL, ARK_TIMEOUT.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ARK_BOT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3/bots"


@dataclass(frozen=True)
class ArkBotConfig:
    bot_id: str
    api_key: str | None = None
    base_url: str = DEFAULT_ARK_BOT_BASE_URL
    timeout: float = 600.0
    temperature: float | None = None
    max_tokens: int | None = None

    def __post_init__(self) -> None:
        if not self.bot_id or not self.bot_id.strip():
            raise ValueError("bot_id must be a non-empty string")
        base_url = (self.base_url or "").strip()
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("ARK_BASE_URL must start with http:// or https://")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_env(cls, **overrides: object) -> ArkBotConfig:
        bot_id = str(overrides.get("bot_id") or os.environ.get("ARK_BOT_ID", "")).strip()
        raw_key = overrides.get("api_key") or os.environ.get("ARK_API_KEY")
        api_key = str(raw_key).strip() if raw_key else None
        base_url = str(overrides.get("base_url") or os.environ.get("ARK_BASE_URL", DEFAULT_ARK_BOT_BASE_URL)).strip().rstrip("/")
        timeout = float(overrides.get("timeout") or os.environ.get("ARK_TIMEOUT", "600"))
        temperature = overrides.get("temperature")
        max_tokens = overrides.get("max_tokens")
        return cls(
            bot_id=bot_id,
            api_key=api_key or None,
            base_url=base_url,
            timeout=timeout,
            temperature=float(temperature) if temperature is not None else None,
            max_tokens=int(max_tokens) if max_tokens is not None else None,
        )


def load_arkbot_config(**overrides: object) -> ArkBotConfig:
    return ArkBotConfig.from_env(**overrides)
