# sitegen/core/llm_client.py
import os
import json
import time
import logging
import uuid
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from sitegen.config import Settings

logger = logging.getLogger(__name__)


class UpstreamUnavailableError(Exception):
    """The Gemini call raised; the caller may retry the same request."""

    retryable = True

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


# -------------------------
# LLM init
# -------------------------
def get_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    api_key = settings.gemini_api_key
    if not api_key:
        raise RuntimeError("Please set GEMINI_API_KEY environment variable for Gemini access.")
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        temperature=settings.gemini_temperature,
        google_api_key=api_key,
    )


def _save_debug_log(log_dir: str, prefix: str, payload: Dict[str, Any]):
    fname = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}_{prefix}.json"
    path = os.path.join(log_dir, fname)
    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
    except OSError:
        logger.exception("Failed to write debug log")


def _content_to_text(content: Any) -> Optional[str]:
    """
    Gemini replies come back either as a plain string or as a list of parts
    (strings or {"type": "text", "text": ...} dicts). Anything else is None.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return None


class ModelClient:
    """
    Thin async wrapper around ChatGoogleGenerativeAI.

    One call per request: no retries, no timeout, no rate limiting.
    The underlying LLM is built on first use so the app can start without a key.
    """

    def __init__(self, settings: Settings, llm: Optional[Any] = None):
        self.settings = settings
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = get_llm(self.settings)
        return self._llm

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """
        Returns the model's text, or "" when the reply has an unexpected shape.
        Raises UpstreamUnavailableError when the call itself fails.
        """
        llm = self.llm
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        start_ts = time.time()
        try:
            result = await llm.ainvoke(messages)
        except Exception as e:
            logger.exception("Gemini call failed after %.2fs", time.time() - start_ts)
            if self.settings.debug:
                _save_debug_log(self.settings.log_dir, "llm_error", {"prompt": user_prompt, "error": repr(e)})
            raise UpstreamUnavailableError(f"model call failed: {e}", cause=e) from e

        text = _content_to_text(getattr(result, "content", None))
        if text is None:
            logger.warning("Unexpected model response shape: %s", type(result).__name__)
            text = ""

        if self.settings.debug:
            _save_debug_log(self.settings.log_dir, "llm_attempt", {
                "duration_s": time.time() - start_ts,
                "prompt": user_prompt,
                "raw_result": text,
            })
        return text
