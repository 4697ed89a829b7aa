from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LlmRequestConfig:
    max_tokens: int = 4000
    temperature: float = 0.3
    top_p: float | None = None
    seed: int | None = None
    stop: list[str] | None = None

    @staticmethod
    def from_values(
        max_tokens: int = 4000,
        temperature: float = 0.3,
        top_p: float | None = None,
        seed: int | None = None,
        stop: list[str] | None = None,
    ) -> "LlmRequestConfig":
        cfg = LlmRequestConfig(
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=top_p,
            seed=seed,
            stop=stop,
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be > 0")
        if self.temperature < 0:
            raise ValueError("temperature must be >= 0")
        if self.top_p is not None and not (0 < self.top_p <= 1):
            raise ValueError("top_p must be in (0, 1] when provided")

        if self.stop is not None:
            for token in self.stop:
                if not token or not token.strip():
                    raise ValueError("stop must only contain non-empty strings")
