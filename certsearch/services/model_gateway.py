"""
Model Gateway - Gemini text generation and certification extraction

Sends a prompt to Gemini and turns the free-form answer into Certification
records.

Architecture:
- API: Google Gen AI Python SDK (google-genai)
- Model: GEMINI_MODEL (default gemini-2.5-flash)
- Output: JSON requested in the prompt and parsed from the response text

The response SHOULD be a bare JSON object but is often wrapped in Markdown
code fences or surrounded by prose. Extraction is deliberately simple and
all-or-nothing:

1. Remove every code-fence marker (``` optionally followed by a language tag).
2. Slice from the first "{" to the last "}" (inclusive).
3. json.loads the slice.

Any failure discards the whole response (MalformedModelResponse). Transport,
auth and quota failures raise UpstreamUnavailable. There are no retries.
"""

import json
import re
from typing import Any, Dict, List, Optional, Protocol

from google import genai
from google.genai import types
from pydantic import ValidationError

from certsearch.schemas.certifications import Certification
from certsearch.utils.exceptions import MalformedModelResponse, UpstreamUnavailable
from certsearch.utils.logging import get_logger, preview

logger = get_logger(__name__)

CODE_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")


class ModelGateway(Protocol):
    """Anything that can turn a prompt into parsed certifications."""

    def fetch_certifications(self, prompt: str) -> List[Certification]:
        ...


# =============================================================================
# EXTRACTION
# =============================================================================

def extract_json_text(raw_text: str) -> str:
    """
    Cut the JSON object candidate out of raw model text.

    Raises:
        MalformedModelResponse: If no "{" ... "}" span exists.
    """
    text = CODE_FENCE_RE.sub("", raw_text or "").strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise MalformedModelResponse("No JSON object found in model response")

    return text[start:end + 1]


def parse_model_payload(raw_text: str) -> Dict[str, Any]:
    """
    Extract and decode the JSON object embedded in raw model text.

    Raises:
        MalformedModelResponse: If extraction or decoding fails.
    """
    candidate = extract_json_text(raw_text)
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedModelResponse(f"Invalid JSON in model response: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedModelResponse("Model response JSON is not an object")

    return payload


def parse_certifications(payload: Dict[str, Any]) -> List[Certification]:
    """
    Build Certification records from a decoded payload.

    A missing or non-list "certifications" value means no results. A record
    that cannot be read fails the whole payload.
    """
    records = payload.get("certifications")
    if not isinstance(records, list):
        logger.warning("Model response has no 'certifications' array, treating as empty")
        return []

    certifications = []
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedModelResponse(f"Certification {idx} is not an object")
        try:
            certifications.append(Certification.model_validate(record))
        except ValidationError as e:
            raise MalformedModelResponse(f"Certification {idx} is invalid: {e}") from e

    return certifications


def _response_text(response: Any) -> Optional[str]:
    # Prefer the first text part; response.text can be None when parts have text
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            for part in candidate.content.parts:
                if getattr(part, "text", None):
                    return part.text

    return response.text


# =============================================================================
# GEMINI GATEWAY
# =============================================================================

class GeminiModelGateway:
    """
    ModelGateway backed by the Gemini API.

    The SDK client is created on first use so a missing key does not break
    application startup; the failure surfaces per request instead.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.2,
        max_output_tokens: int = 8192,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client

        if not self.api_key:
            logger.warning("GEMINI_API_KEY not configured; request will go out with an empty credential")

        try:
            self._client = genai.Client(api_key=self.api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")
            raise UpstreamUnavailable(f"Gemini client initialization failed: {e}") from e

        logger.info(f"Gemini client initialized (model={self.model})")
        return self._client

    def generate_text(self, prompt: str) -> str:
        """
        Send ``prompt`` to Gemini and return the answer text.

        Raises:
            UpstreamUnavailable: On any SDK or transport failure.
            MalformedModelResponse: If the answer has no text.
        """
        client = self._get_client()

        config = types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

        try:
            logger.info(f"Calling Gemini API (model={self.model}, prompt_chars={len(prompt)})")
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise UpstreamUnavailable(f"Gemini API call failed: {e}") from e

        try:
            content = _response_text(response)
        except Exception as e:
            logger.error(f"Unexpected Gemini response shape: {e}")
            raise MalformedModelResponse(f"Unreadable Gemini response: {e}") from e

        if not content:
            logger.error("Empty text in Gemini response")
            raise MalformedModelResponse("Gemini returned no text")

        return content

    def fetch_certifications(self, prompt: str) -> List[Certification]:
        """Generate, extract and parse certifications for ``prompt``."""
        raw_text = self.generate_text(prompt)
        try:
            payload = parse_model_payload(raw_text)
            certifications = parse_certifications(payload)
        except MalformedModelResponse as e:
            logger.error(f"Failed to parse model response: {e}")
            logger.error(f"Raw content: {preview(raw_text)}")
            raise

        logger.info(f"Gemini returned {len(certifications)} certification(s)")
        return certifications
