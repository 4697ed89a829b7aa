from __future__ import annotations
from dataclasses import dataclass
from typing import Any
import httpx
import requests

from nlp.llm.llm_types import ChatResponse

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from config.llm_endpoint_config import LlmEndpointConfig
    from config.llm_request_config import LlmRequestConfig

JSONDict = dict[str, Any]


@dataclass
class OpenAICompatChatClient:
    server_url: str
    model_name: str
    request_cfg: LlmRequestConfig
    api_key: str = ""
    timeout_s: float = 120.0

    @staticmethod
    def from_config(
        endpoint: "LlmEndpointConfig",
        request_cfg: "LlmRequestConfig",
    ) -> "OpenAICompatChatClient":
        return OpenAICompatChatClient(
            server_url=endpoint.chat_completions_url,
            model_name=endpoint.model,
            request_cfg=request_cfg,
            api_key=endpoint.api_key,
            timeout_s=endpoint.timeout_s,
        )

    # ----- INTERNALS -----

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def _build_payload(
            self,
            system: str,
            user: str,
            **kwargs
    ) -> JSONDict:
        payload: JSONDict = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user}
            ],
        }

        # Explicit overrides win over the request config defaults
        for field in ("max_tokens", "temperature", "top_p", "seed", "stop"):
            val = kwargs.get(field)
            if val is None:
                val = getattr(self.request_cfg, field, None)

            if val is not None:
                payload[field] = val
        return payload

    @staticmethod
    def _extract_str(value: Any) -> str | None:
        return value if isinstance(value, str) else None

    def _parse_chat_response(self, data: Any) -> ChatResponse:
        data = data if isinstance(data, dict) else {}
        choices = data.get("choices")
        first_choice: dict[str, Any] = {}
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            first_choice = choices[0]

        message = first_choice.get("message")
        message_dict = message if isinstance(message, dict) else {}

        content = self._extract_str(message_dict.get("content")) or ""
        finish_reason = self._extract_str(first_choice.get("finish_reason"))
        model = self._extract_str(data.get("model"))
        usage = data.get("usage") if isinstance(data.get("usage"), dict) else None

        return ChatResponse(
            content=content.strip(),
            finish_reason=finish_reason,
            model=model,
            usage=usage,
        )

    # ----- API: chat, chat_async -----

    def chat(self, system: str, user: str, **kwargs) -> ChatResponse:
        payload = self._build_payload(system=system, user=user, **kwargs)

        try:
            response = requests.post(
                self.server_url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_s,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"LLM API request failed: {e}") from e

        return self._parse_chat_response(response.json())

    async def chat_async(self, system: str, user: str, **kwargs) -> ChatResponse:
        payload = self._build_payload(system=system, user=user, **kwargs)

        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            try:
                response = await client.post(
                    self.server_url,
                    json=payload,
                    headers=self._headers(),
                )
                # Raises httpx.HTTPStatusError if response is 4xx or 5xx
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise RuntimeError(f"LLM API error: {exc}") from exc

        return self._parse_chat_response(response.json())
