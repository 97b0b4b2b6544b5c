"""
Model response parsing
Extracts the JSON object from Claude responses that may be wrapped in
markdown code fences or surrounded by commentary.
"""

from typing import Dict, Any
import json
import re
from app.core.exceptions import AIResponseParseError
from app.core.logging_config import logger


JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")


class JSONResponseParser:
    """Parse JSON payloads out of free-form model output"""

    @staticmethod
    def extract_json_block(response: str) -> str:
        """
        Return the text most likely to be the JSON payload.

        Order of preference:
        1. ```json ... ``` fenced block
        2. any ``` ... ``` fenced block
        3. the outermost {...} span
        4. the stripped response itself
        """
        match = JSON_FENCE.search(response)
        if match:
            return match.group(1).strip()

        match = ANY_FENCE.search(response)
        if match:
            return match.group(1).strip()

        start = response.find("{")
        end = response.rfind("}")
        if start != -1 and end > start:
            return response[start:end + 1]

        return response.strip()

    @staticmethod
    def parse_object(response: str) -> Dict[str, Any]:
        """
        Parse a JSON object from the response.

        Raises:
            AIResponseParseError: if no JSON object can be decoded
        """
        if not response or not response.strip():
            raise AIResponseParseError("Empty response from AI service")

        candidate = JSONResponseParser.extract_json_block(response)
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.warning(
                f"[JSONResponseParser] Could not decode AI response: {e}",
                extra={"event_type": "ai_parse_error", "response_length": len(response)}
            )
            raise AIResponseParseError(f"Failed to parse AI response as JSON: {e.msg}") from e

        if not isinstance(parsed, dict):
            raise AIResponseParseError("AI response JSON is not an object")

        return parsed
