"""
Agent LLM: OpenAI (primary) or Hugging Face (fallback).
When OPENAI_API_KEY is set, uses OpenAI chat completions; otherwise uses HF router.

ModelClient is the handle the orchestrator is constructed with. It keeps no per-call
state, so one instance can serve concurrent requests. Failures are raised as
ModelError subclasses; the orchestrator turns them into a user-facing answer.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import httpx

from app.core.config import (
    CANCEL_POLL_INTERVAL,
    HF_API_KEY,
    HF_CHAT_URL,
    HF_LLM_MODEL,
    LLM_API_TIMEOUT,
    LLM_MAX_TOKENS,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from app.core.errors import (
    ModelError,
    ModelTimeoutError,
    ModelTransportError,
    ModelUnavailableError,
    OrchestrationCancelledError,
)

logger = logging.getLogger(__name__)


def combine_prompt(system_prompt: str, user_query: str) -> str:
    """Single-message prompt: system instructions followed by the user query."""
    return f"{system_prompt}\n\nUser Query: {user_query}"


class ModelClient:
    """Text generation over OpenAI chat completions, with the HF router as fallback."""

    def __init__(
        self,
        openai_api_key: str = OPENAI_API_KEY,
        openai_model: str = OPENAI_LLM_MODEL,
        hf_api_key: str = HF_API_KEY,
        hf_model: str = HF_LLM_MODEL,
        hf_url: str = HF_CHAT_URL,
        timeout: float = LLM_API_TIMEOUT,
        max_tokens: int = LLM_MAX_TOKENS,
    ) -> None:
        self.openai_api_key = openai_api_key
        self.openai_model = openai_model
        self.hf_api_key = hf_api_key
        self.hf_model = hf_model
        self.hf_url = hf_url
        self.timeout = timeout
        self.max_tokens = max_tokens

    @property
    def configured(self) -> bool:
        return bool(self.openai_api_key or self.hf_api_key)

    def _call_openai(self, prompt: str) -> str:
        """Call OpenAI chat completions. Returns generated text."""
        try:
            import openai
        except ImportError as e:
            raise ModelUnavailableError("openai package not installed; pip install openai") from e
        client = openai.OpenAI(api_key=self.openai_api_key, timeout=self.timeout, max_retries=0)
        try:
            response = client.chat.completions.create(
                model=self.openai_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise ModelTimeoutError(f"OpenAI request timed out after {self.timeout}s") from e
        except openai.APIError as e:
            raise ModelTransportError(f"OpenAI request failed: {e}") from e
        msg = response.choices[0].message if response.choices else None
        out = (getattr(msg, "content", None) or "").strip()
        if not out:
            raise ModelTransportError("OpenAI returned an empty response")
        logger.info("[llm:openai] OUT response_len=%d", len(out))
        logger.debug("[llm:openai] OUT response_full=%r", out)
        return out

    def _call_hf(self, prompt: str) -> str:
        """Call Hugging Face router chat completions. Returns generated text."""
        headers = {"Authorization": f"Bearer {self.hf_api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.hf_model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.hf_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ModelTimeoutError(f"Hugging Face request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise ModelTransportError(f"Hugging Face request failed: {e}") from e
        if response.status_code != 200:
            logger.warning("[llm:hf] HF LLM error %s: %s", response.status_code, response.text[:200])
            raise ModelTransportError(f"Hugging Face returned HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise ModelTransportError("Hugging Face returned invalid JSON") from e
        choices = data.get("choices") or []
        out = ""
        if choices and isinstance(choices[0], dict):
            msg = choices[0].get("message") or {}
            out = (msg.get("content") or "").strip()
        if not out:
            raise ModelTransportError("Hugging Face returned an empty response")
        logger.info("[llm:hf] OUT response_len=%d", len(out))
        logger.debug("[llm:hf] OUT response_full=%r", out)
        return out

    def complete(self, prompt: str) -> str:
        """
        Generate text for a full prompt. Uses OpenAI when configured, else Hugging Face.
        If OpenAI fails and an HF key is set, falls back to HF.
        """
        if not self.configured:
            raise ModelUnavailableError("No model provider configured. Set OPENAI_API_KEY or HF_API_KEY.")
        if self.openai_api_key:
            try:
                return self._call_openai(prompt)
            except ModelError as e:
                if not self.hf_api_key:
                    raise
                logger.info("[llm] OpenAI failed (%s); falling back to Hugging Face", e.message)
        return self._call_hf(prompt)

    def generate(
        self,
        system_prompt: str,
        user_query: str,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """
        Generate a response for system_prompt + user_query.
        With a cancel_event, the call runs in a worker thread and the wait is abandoned
        as soon as the event is set (raises OrchestrationCancelledError).
        """
        prompt = combine_prompt(system_prompt, user_query)
        logger.info("[llm] IN  prompt_len=%d query=%r", len(prompt), user_query[:100])
        logger.debug("[llm] system_prompt=%r", system_prompt[:200])
        if cancel_event is None:
            return self.complete(prompt)
        if cancel_event.is_set():
            raise OrchestrationCancelledError()

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="model-call")
        try:
            future = executor.submit(self.complete, prompt)
            # Hard bound on the wait in case the provider ignores its own timeout
            remaining = self.timeout + 5.0
            while True:
                try:
                    return future.result(timeout=CANCEL_POLL_INTERVAL)
                except FutureTimeoutError:
                    if cancel_event.is_set():
                        future.cancel()
                        logger.info("[llm] call cancelled by caller")
                        raise OrchestrationCancelledError() from None
                    remaining -= CANCEL_POLL_INTERVAL
                    if remaining <= 0:
                        future.cancel()
                        raise ModelTimeoutError(f"Model call exceeded {self.timeout}s") from None
        finally:
            executor.shutdown(wait=False)
