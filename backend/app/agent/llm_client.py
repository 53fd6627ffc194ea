import json
import logging
import re
from typing import TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from app.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_WHOLE_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_+-]*\s*\n?([\s\S]*?)\s*```\s*$")


class EmptyResponseError(ValueError):
    """The provider answered, but with no usable content."""


def strip_code_fences(text: str) -> str:
    if not text:
        return ""
    fenced = _WHOLE_FENCE_RE.match(text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def _first_json_value(text: str) -> str | None:
    """Return the first decodable JSON object/array embedded in free text."""
    decoder = json.JSONDecoder(strict=False)
    for idx, ch in enumerate(text):
        if ch not in "{[":
            continue
        try:
            _, end = decoder.raw_decode(text, idx)
        except json.JSONDecodeError:
            continue
        return text[idx:end]
    return None


def json_candidates(raw_text: str) -> list[str]:
    """
    Strings worth handing to json.loads, most specific first:
    the first fenced block, the whole reply, then the first embedded JSON value.
    """
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: list[str] = []
    fenced = _FENCE_RE.findall(text)
    if fenced:
        candidates.append(fenced[0])
    candidates.append(text)
    embedded = _first_json_value(text)
    if embedded:
        candidates.append(embedded)

    return list(dict.fromkeys(c.strip() for c in candidates if c.strip()))


class LLMClient:
    """Chat-completions client for any OpenAI-compatible endpoint (Gemini by default)."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        # LLM_API_KEY takes precedence; GEMINI_API_KEY covers the default endpoint
        resolved_api_key = api_key or settings.LLM_API_KEY or settings.GEMINI_API_KEY
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
        )

    async def _complete(self, system_prompt: str, user_prompt: str, *, temperature: float) -> str:
        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
        )
        if not getattr(response, "choices", None):
            logger.warning("Received no choices from %s: %s", self.model_name, response)
            return ""
        return response.choices[0].message.content or ""

    async def generate_text(self, system_prompt: str, user_prompt: str, *, temperature: float = 0.2) -> str:
        """
        Plain text generation (source files, HTML). Markdown fences wrapping the whole
        reply are removed. Empty replies get one stricter re-prompt before
        EmptyResponseError is raised; provider errors propagate untouched.
        """
        prompts = [
            system_prompt,
            (
                f"{system_prompt}\n\n"
                "RETRY INSTRUCTIONS: Your previous response was empty. Return only the "
                "requested code with no markdown fences and no explanation."
            ),
        ]
        for attempt_idx, system_prompt_attempt in enumerate(prompts, start=1):
            logger.info(
                "Issuing text request to model %s (attempt %s/%s)...",
                self.model_name,
                attempt_idx,
                len(prompts),
            )
            text_response = strip_code_fences(
                await self._complete(
                    system_prompt_attempt,
                    user_prompt,
                    temperature=0 if attempt_idx > 1 else temperature,
                )
            )
            if text_response:
                return text_response
            logger.warning(
                "Empty text response from %s on attempt %s/%s",
                self.model_name,
                attempt_idx,
                len(prompts),
            )
        raise EmptyResponseError(f"Model {self.model_name} returned empty content")

    async def generate_structured(
        self, system_prompt: str, user_prompt: str, response_schema: type[T]
    ) -> T:
        """
        Generate a response matching the given Pydantic schema.
        The JSON schema is injected into the system prompt instead of relying on
        provider JSON mode, and the reply is parsed best-effort. One stricter
        re-prompt is made before giving up with ValueError.
        """
        schema_json = json.dumps(response_schema.model_json_schema())
        augmented_system_prompt = (
            f"{system_prompt}\n\n"
            "CRITICAL: Respond with ONLY valid JSON matching the following JSON Schema. "
            "No markdown code fences and no text around the JSON.\n\n"
            f"EXPECTED SCHEMA:\n{schema_json}"
        )
        attempt_prompts = [
            augmented_system_prompt,
            (
                f"{augmented_system_prompt}\n\n"
                "RETRY INSTRUCTIONS: Your previous response was invalid or incomplete. "
                "Return ONLY a single JSON object matching the schema."
            ),
        ]

        errors: list[str] = []
        for attempt_idx, system_prompt_attempt in enumerate(attempt_prompts, start=1):
            logger.info(
                "Issuing structured request to model %s (attempt %s/%s)...",
                self.model_name,
                attempt_idx,
                len(attempt_prompts),
            )
            text_response = await self._complete(
                system_prompt_attempt,
                user_prompt,
                temperature=0 if attempt_idx > 1 else 0.2,
            )
            for candidate in json_candidates(text_response):
                try:
                    return response_schema.model_validate(json.loads(candidate, strict=False))
                except (json.JSONDecodeError, ValidationError) as candidate_error:
                    errors.append(str(candidate_error))
            if not text_response.strip():
                errors.append("empty response")
            logger.warning(
                "Structured parsing failed for %s on attempt %s/%s",
                self.model_name,
                attempt_idx,
                len(attempt_prompts),
            )

        logger.error("Error parsing structured response from %s: %s", self.model_name, errors[-1:])
        raise ValueError(
            "Unable to parse structured response: " + " | ".join(errors[:3])
        )
