"""
=============================================================================
SCRIPT NAME: analyzer.py
=============================================================================

INPUT FILES:
- None read directly. Receives source text from `reader.read_source`.

OUTPUT FILES:
- None. Returns the review text for display.

NOTES:
- Uses Anthropic Claude by default, OpenAI chat completions as alternate.
- The API key is part of `Settings`; a missing key yields an error string
  instead of a request.
- API failures never raise out of `analyze`: the caller gets an error string
  and the run moves on to the next file.
=============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from anthropic import Anthropic
from openai import OpenAI

from .config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert security auditor and code reviewer."

PROMPT_TEMPLATE = """Analyze the following code from the file '{filename}' for:
- Security vulnerabilities
- Potential bugs
- Performance optimizations

Provide a concise, structured report of your findings.

Code to analyze:
{code}"""


def build_prompt(code: str, filename: str) -> str:
    return PROMPT_TEMPLATE.format(filename=filename, code=code)


class CodeAnalyzer:
    def __init__(self, settings: Settings, client: Optional[Any] = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if self.settings.provider == "openai":
                self._client = OpenAI(api_key=self.settings.api_key)
            else:
                self._client = Anthropic(api_key=self.settings.api_key)
        return self._client

    def analyze(self, code: str, filename: str) -> str:
        """Return the model's review of `code`, or an "Error..." string."""
        if not self.settings.api_key and self._client is None:
            return f"Error: {self.settings.api_key_var} is not set."
        prompt = build_prompt(code, filename)
        try:
            if self.settings.provider == "openai":
                return self._complete_openai(prompt)
            return self._complete_anthropic(prompt)
        except Exception as exc:
            logger.info("Analysis of %s failed: %s", filename, exc)
            return f"Error analyzing {filename}: {exc}"

    def _complete_anthropic(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.settings.model,
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(block.text for block in response.content if hasattr(block, "text"))

    def _complete_openai(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.settings.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return response.choices[0].message.content or ""
