"""LLM response parsing — JSON object extraction."""

import json
import logging
import re

from growing_together.core.errors import ContentGenerationFailure

logger = logging.getLogger(__name__)


class ResponseParser:
    """LLM response parsing"""

    def parse_json(self, raw: str) -> dict:
        """Extract a JSON object from the raw response.

        Stages:
        1. Whole text as JSON -> json.loads()
        2. ```json ... ``` block extraction
        3. Failure -> ContentGenerationFailure
        """
        # stage 1: whole text
        parsed = self._try_parse_json(raw.strip())
        if parsed is not None:
            return parsed

        # stage 2: fenced block
        json_block = self._extract_json_block(raw)
        if json_block is not None:
            parsed = self._try_parse_json(json_block)
            if parsed is not None:
                return parsed

        logger.warning("Failed to parse JSON response (len=%d)", len(raw))
        raise ContentGenerationFailure("Content provider returned unparseable JSON")

    def _try_parse_json(self, text: str) -> dict | None:
        """Try json.loads. None on failure or non-object."""
        try:
            result = json.loads(text)
            if isinstance(result, dict):
                return result
            return None
        except (json.JSONDecodeError, TypeError):
            return None

    def _extract_json_block(self, text: str) -> str | None:
        match = re.search(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL)
        if match:
            return match.group(1)
        return None
