"""OpenAI-backed commit message generation."""

from __future__ import annotations

import logging
from typing import Any, Optional

from openai import OpenAI

DEFAULT_MODEL = "gpt-4o-mini"
FALLBACK_MESSAGE = "chore: update codebase"
MAX_TOKENS = 100
TEMPERATURE = 0.7

SYSTEM_PROMPT = (
    "You are a helpful assistant that generates concise and descriptive git commit "
    "messages based on code changes. Follow conventional commits format."
)


def build_openai_client(api_key: str, base_url: Optional[str] = None) -> OpenAI:
    """Create the OpenAI client once at startup. Calls are never retried."""
    return OpenAI(api_key=api_key, base_url=base_url, max_retries=0)


class CommitMessageGenerator:
    def __init__(
        self,
        client: Any,
        model: str = DEFAULT_MODEL,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self._model = model
        self._log = logger or logging.getLogger(__name__)

    @property
    def model(self) -> str:
        return self._model

    def _prompt(self, summary: str) -> str:
        return f"Generate a concise commit message for these changes:\n{summary}"

    def generate(self, summary: str) -> str:
        """Return a commit message for summary, or FALLBACK_MESSAGE.

        Service errors are logged and swallowed; the result is never empty.
        """
        try:
            resp = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": self._prompt(summary)},
                ],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
            content = resp.choices[0].message.content
        except Exception as e:
            self._log.error("Error generating commit message: %s", e)
            return FALLBACK_MESSAGE

        if not content or not content.strip():
            self._log.warning("Model returned an empty commit message; using fallback.")
            return FALLBACK_MESSAGE
        return content
