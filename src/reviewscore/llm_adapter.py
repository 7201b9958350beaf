"""
Bedrock runtime adapter for the messages-style inference API.
Provides a single generate helper; on any transport, decoding or shape error
it raises LLMFallbackError so callers can fall back to their defaults.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class LLMFallbackError(RuntimeError):
    """Raised when the inference call must be skipped."""


class LLMAdapter:
    """
    Thin wrapper around a bedrock-runtime client.
    - generate: one system + user turn, returns the first text block
    """

    def __init__(self, client: Any, model_id: str) -> None:
        self._client = client
        self._model_id = model_id

    # Public API -----------------------------------------------------
    def generate(
        self,
        prompt: str,
        *,
        system: str,
        max_tokens: int = 400,
        temperature: float = 0.0,
        top_p: float | None = None,
    ) -> str:
        payload = self._build_payload(prompt, system, max_tokens, temperature, top_p)
        try:
            response = self._client.invoke_model(
                modelId=self._model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(payload),
            )
            raw = response["body"].read()
            data = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        except Exception as exc:
            self._log_fallback("generate-error", prompt, str(exc))
            raise LLMFallbackError(f"LLM generate failed: {exc}") from exc

        text = self._extract_text(data)
        if text is None:
            self._log_fallback("generate-shape", prompt, json.dumps(data)[:200])
            raise LLMFallbackError("LLM response carried no text content")
        self._log_event("generate", {"prompt": prompt, "output": text})
        return text.strip()

    # Internal helpers ----------------------------------------------
    @staticmethod
    def _build_payload(
        prompt: str,
        system: str,
        max_tokens: int,
        temperature: float,
        top_p: float | None,
    ) -> Dict[str, Any]:
        inference_config: Dict[str, Any] = {"maxTokens": max_tokens, "temperature": temperature}
        if top_p is not None:
            inference_config["topP"] = top_p
        return {
            "system": [{"text": system}],
            "messages": [{"role": "user", "content": [{"text": prompt}]}],
            "inferenceConfig": inference_config,
        }

    @staticmethod
    def _extract_text(data: Any) -> str | None:
        # Nova returns {"output": {"message": {"content": [{"text": "..."}]}}}
        if not isinstance(data, dict):
            return None
        output = data.get("output")
        message = output.get("message") if isinstance(output, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, list) or not content:
            return None
        first = content[0]
        if isinstance(first, dict) and isinstance(first.get("text"), str):
            return first["text"]
        return None

    def _log_event(self, event: str, payload: Dict[str, Any]) -> None:
        short_payload = payload.copy()
        if "prompt" in short_payload:
            short_payload["prompt"] = (short_payload["prompt"] or "")[:200]
        if "output" in short_payload and isinstance(short_payload["output"], str):
            short_payload["output"] = short_payload["output"][:200]
        short_payload["event"] = event
        short_payload["model_id"] = self._model_id
        logger.debug("LLM event: %s", json.dumps(short_payload, ensure_ascii=False))

    def _log_fallback(self, reason: str, prompt: str, error: str) -> None:
        logger.warning("LLM fallback (%s): %s", reason, error[:200])
        self._log_event("fallback", {"reason": reason, "prompt": prompt, "error": error[:200]})
