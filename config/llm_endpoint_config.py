from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"
_CHAT_COMPLETIONS = "/chat/completions"


@dataclass(frozen=True, slots=True)
class LlmEndpointConfig:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout_s: float = 120.0

    @property
    def chat_completions_url(self) -> str:
        base = self.base_url.rstrip("/")
        if base.endswith(_CHAT_COMPLETIONS):
            return base
        return f"{base}{_CHAT_COMPLETIONS}"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def with_api_key(self, api_key: str | None) -> "LlmEndpointConfig":
        if not api_key:
            return self
        return LlmEndpointConfig(
            base_url=self.base_url,
            api_key=api_key,
            model=self.model,
            timeout_s=self.timeout_s,
        )

    @staticmethod
    def from_strings(
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout_s: str | float = 120.0,
    ) -> "LlmEndpointConfig":
        cfg = LlmEndpointConfig(
            base_url=(base_url or "").strip() or DEFAULT_BASE_URL,
            api_key=(api_key or "").strip(),
            model=(model or "").strip() or DEFAULT_MODEL,
            timeout_s=float(timeout_s),
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "LlmEndpointConfig":
        env = os.environ if environ is None else environ
        return LlmEndpointConfig.from_strings(
            base_url=env.get("OPENAI_BASE_URL"),
            api_key=env.get("OPENAI_API_KEY"),
            model=env.get("OPENAI_MODEL"),
        )

    def validate(self) -> None:
        for field_name, value in [("base_url", self.base_url), ("model", self.model)]:
            if not value or not value.strip():
                raise ValueError(f"{field_name} must be a non-empty string")

        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got: {self.base_url}")

        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
