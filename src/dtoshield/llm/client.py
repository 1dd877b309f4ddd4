# src/dtoshield/llm/client.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from dtoshield.config import API_KEY_ENV, DEFAULT_BASE_URL
from dtoshield.errors import MissingCredentialError
from dtoshield.models import GenerationResult, Instruction, PromptPair

logger = logging.getLogger(__name__)

# Structured reply requested for system/user recipes
ENHANCED_FILE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "reason": {"type": "STRING"},
        "enhancedFile": {"type": "STRING"},
    },
    "required": ["reason", "enhancedFile"],
}


def _env_timeout() -> Optional[float]:
    raw = os.getenv("DTOSHIELD_TIMEOUT_S", "").strip()
    return float(raw) if raw else None


@dataclass
class GenerationConfig:
    """Gemini REST settings, read from the environment.

    There is no request timeout unless DTOSHIELD_TIMEOUT_S is set; a slow
    generation simply blocks the batch.
    """
    api_key: str = field(default_factory=lambda: os.getenv(API_KEY_ENV, ""))
    base_url: str = field(default_factory=lambda: os.getenv("DTOSHIELD_BASE_URL", DEFAULT_BASE_URL))
    temperature: float = field(default_factory=lambda: float(os.getenv("DTOSHIELD_TEMPERATURE", "0.3")))
    timeout_s: Optional[float] = field(default_factory=_env_timeout)
    disable_env_proxy: bool = field(
        default_factory=lambda: os.getenv("DTOSHIELD_DISABLE_ENV_PROXY", "0") in {"1", "true", "True", "yes", "Y"}
    )


class GeminiClient:
    def __init__(self, cfg: GenerationConfig):
        self.cfg = cfg
        self.session = requests.Session()
        if cfg.disable_env_proxy:
            self.session.trust_env = False

    def ensure_credentials(self) -> None:
        if not self.cfg.api_key:
            raise MissingCredentialError(API_KEY_ENV)

    def _post(self, model: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/models/{model}:generateContent"
        logger.debug("POST %s", url)
        headers = {"x-goog-api-key": self.cfg.api_key, "Content-Type": "application/json"}
        r = self.session.post(url, headers=headers, json=payload, timeout=self.cfg.timeout_s)
        r.raise_for_status()
        return r.json()

    def _payload(self, instruction: Instruction) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {"temperature": self.cfg.temperature}
        if isinstance(instruction, PromptPair):
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = ENHANCED_FILE_SCHEMA
            return {
                "systemInstruction": {"parts": [{"text": instruction.system}]},
                "contents": [{"role": "user", "parts": [{"text": instruction.user}]}],
                "generationConfig": generation_config,
            }
        return {
            "contents": [{"role": "user", "parts": [{"text": instruction}]}],
            "generationConfig": generation_config,
        }

    def generate(self, instruction: Instruction, model: str) -> GenerationResult:
        """Runs one generation. Every failure is returned, never raised."""
        try:
            data = self._post(model, self._payload(instruction))
            text = response_text(data)
        except requests.RequestException as e:
            return GenerationResult.failure(f"Request failed: {e}")
        except ValueError as e:
            return GenerationResult.failure(str(e))

        if not isinstance(instruction, PromptPair):
            return GenerationResult(text=text)

        try:
            obj = extract_first_json_object(text)
        except ValueError as e:
            return GenerationResult.failure(f"Malformed structured reply: {e}")
        enhanced = obj.get("enhancedFile")
        if not isinstance(enhanced, str):
            return GenerationResult.failure("Structured reply has no 'enhancedFile' string")
        return GenerationResult(text=enhanced, reason=str(obj.get("reason", "")).strip())


def response_text(data: Dict[str, Any]) -> str:
    """Joins the text parts of the first candidate of a generateContent reply."""
    candidates = data.get("candidates") or []
    if not candidates:
        block = (data.get("promptFeedback") or {}).get("blockReason")
        raise ValueError(f"No candidates returned (blockReason={block})" if block else "No candidates returned")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts)
    if not text:
        finish = candidates[0].get("finishReason", "unknown")
        raise ValueError(f"Empty response (finishReason={finish})")
    return text


def extract_first_json_object(text: str) -> Dict[str, Any]:
    """Best-effort extraction of the first JSON object from a possibly chatty response."""
    text = text.strip()
    if not text:
        raise ValueError("Empty response")
    # Fast path: full JSON
    try:
        obj = json.loads(text)
        if isinstance(obj, dict):
            return obj
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    if start < 0:
        raise ValueError("No '{' found in response")
    try:
        obj, _ = json.JSONDecoder().raw_decode(text[start:])
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON: {e}. Head: {text[start:start + 200]}")
    if not isinstance(obj, dict):
        raise ValueError("Extracted JSON is not an object")
    return obj
