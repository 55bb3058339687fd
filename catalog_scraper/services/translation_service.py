"""Product description translation via an LLM chat-completions API.

The model gets both Polish descriptions in one prompt and must answer with a
JSON object holding the Estonian ``shortDescription`` and ``longDescription``.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

from catalog_scraper.config import settings
from catalog_scraper.core.exceptions import (
    MissingCredentialError,
    TranslationParseError,
    TranslationRequestError,
)

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT = "You are a helpful native Estonian translator designed to output JSON."

TRANSLATION_PROMPT = """
You are an expert native Estonian translator and marketing copywriter, translating from Polish to Estonian for a pet food e-commerce site.

### TASK
Process the provided Polish product information and generate two Estonian descriptions: a short one and a long one.

### INPUT DATA
- Polish Short Description: "{short_description}"
- Polish Long Description: "{long_description}"

### OUTPUT FORMAT
Your final output MUST be a single, valid JSON object with two keys: "shortDescription" and "longDescription". Do not include any text outside of the JSON object.

### INSTRUCTIONS
1.  **For the "shortDescription" value:** Translate the Polish Short Description into a concise, appealing Estonian marketing sentence.
2.  **For the "longDescription" value:** Use the Polish Long Description to create a structured Estonian version. It must include:
    - A short, appealing summary paragraph.
    - All structured data found (feeding table, ingredients/Koostisosad, additives/Toidulisandid, etc.), translated into Estonian.
    - Preserve the formatting with newlines (\\n) within the JSON string value.

Example JSON structure to return:
{{
  "shortDescription": "Täissööt...",
  "longDescription": "BRIT Premium By Nature on täisväärtuslik kuivtoit...\\n\\nSöötmistabel:\\n<tabel>\\n\\nKoostisosad:\\n<koostisosad>..."
}}"""


@dataclass
class TranslationResult:
    """Translated descriptions; an empty value means the model left it out."""

    short_description: str = ""
    long_description: str = ""


class BaseTranslator(ABC):
    """Abstract translator of a product's two descriptions."""

    @abstractmethod
    async def translate(self, short_text: str, long_text: str) -> TranslationResult:
        """Translate both descriptions in one call.

        Raises:
            TranslationRequestError: If the service cannot be reached or errors
            TranslationParseError: If the answer is not the expected JSON object
        """

    async def close(self) -> None:
        """Release connections."""


class OpenAITranslator(BaseTranslator):
    """Translator backed by the OpenAI chat-completions endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = settings.OPENAI_MODEL,
        base_url: str = settings.OPENAI_BASE_URL,
        temperature: float = settings.AI_TEMPERATURE,
        max_tokens: int = settings.AI_MAX_TOKENS,
        timeout: float = settings.TRANSLATION_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key: OpenAI API key
            model: Chat model name
            base_url: API root, without the trailing ``/chat/completions``
            temperature: Sampling temperature
            max_tokens: Completion token limit
            timeout: Request timeout in seconds
            http_client: Client to use instead of an owned one (tests, proxies)

        Raises:
            MissingCredentialError: If ``api_key`` is empty
        """
        if not api_key:
            raise MissingCredentialError("OPENAI_API_KEY")

        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._endpoint = f"{base_url.rstrip('/')}/chat/completions"
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self.logger = logger.bind(service="translator", model=model)

    async def translate(self, short_text: str, long_text: str) -> TranslationResult:
        content = await self._complete(
            TRANSLATION_PROMPT.format(
                short_description=short_text,
                long_description=long_text,
            )
        )
        result = self._parse_content(content)
        self.logger.info("translation_received")
        return result

    async def _complete(self, prompt: str) -> str:
        """Send one chat completion request and return the message content."""
        payload = {
            "model": self.model,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        self.logger.debug("calling_translation_api", endpoint=self._endpoint)
        try:
            response = await self._client.post(
                self._endpoint, json=payload, headers=self._headers
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise TranslationRequestError(
                f"Translation API returned {e.response.status_code}: {e.response.text[:500]}"
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TranslationRequestError(f"Translation API request failed: {e}")
        except ValueError as e:
            raise TranslationRequestError(f"Translation API returned invalid JSON: {e}")

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise TranslationRequestError("Translation API response has no message content")

    @staticmethod
    def _parse_content(content: str) -> TranslationResult:
        """Read the two descriptions from the model's JSON answer."""
        try:
            parsed = json.loads(content)
        except (TypeError, ValueError) as e:
            raise TranslationParseError(f"Model output is not valid JSON: {e}")

        if not isinstance(parsed, dict):
            raise TranslationParseError("Model output is not a JSON object")

        short_description = parsed.get("shortDescription") or ""
        long_description = parsed.get("longDescription") or ""
        if not isinstance(short_description, str) or not isinstance(long_description, str):
            raise TranslationParseError("Model output descriptions must be strings")

        return TranslationResult(
            short_description=short_description,
            long_description=long_description,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def create_translator() -> Optional[BaseTranslator]:
    """Translator from the global settings, or None when translation is disabled.

    Raises:
        MissingCredentialError: If translation is enabled without an API key
    """
    if not settings.TRANSLATION_ENABLED:
        return None
    return OpenAITranslator(api_key=settings.OPENAI_API_KEY)
