"""
AI Manager for domain name suggestions - provider agnostic
"""
import httpx
from typing import Dict, List, Optional
from openai import AsyncOpenAI
import logging

from config.settings import settings
from config.constants import MAX_AI_SUGGESTIONS
from core.exceptions import AIGenerationError, MissingAPIKeyError
from utils.text_parsers import parse_domain_suggestions

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a creative domain name generator. "
    "Always respond with valid JSON arrays of domain names only."
)

SUGGESTION_PROMPT = """Generate {count} creative and memorable domain name suggestions based on the keyword "{keyword}". Follow these guidelines:

1. Make them short, catchy, and brandable
2. Include variations with different TLDs (.com, .ai, .app, .io, .co)
3. Consider word combinations, abbreviations, and creative spellings
4. Make them relevant to businesses, startups, or projects
5. Avoid trademark conflicts with major brands

Return ONLY a JSON array of {count} domain names (without http:// or https://).

No additional text or formatting."""


class AIManager:
    """
    Singleton AI Manager for text generation
    Works with any OpenAI-compatible API configured in settings
    """

    _instance = None

    def __init__(self):
        self.text_client = None
        self.model = settings.text_model
        self._init_text_client()

        self.request_count = 0
        self.total_tokens = 0

    def _init_text_client(self):
        """Initialize text generation client"""
        if not settings.has_text_api():
            logger.warning("⚠️ No text API key configured; AI suggestions will fall back to pattern expansion")
            return

        if settings.text_api_provider in ["openrouter", "openai", "together"]:
            self.text_client = AsyncOpenAI(
                base_url=settings.text_api_url,
                api_key=settings.text_api_key
            )
        else:
            # Custom completion APIs
            self.text_client = httpx.AsyncClient(
                base_url=settings.text_api_url,
                headers={"Authorization": f"Bearer {settings.text_api_key}"},
                timeout=30.0
            )

        logger.info(f"✅ Text client initialized ({settings.text_api_provider}, {self.model})")

    @classmethod
    def initialize(cls):
        """Initialize singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def get_instance(cls):
        """Get singleton instance, creating it on first use"""
        return cls.initialize()

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2000
    ) -> str:
        """
        Generate text with the configured model

        Args:
            prompt: The prompt to generate from
            system_prompt: Optional system message
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text
        """
        if not self.text_client:
            raise MissingAPIKeyError("text_generation")

        try:
            logger.debug(f"Generating text with {self.model}")

            if isinstance(self.text_client, AsyncOpenAI):
                messages = []
                if system_prompt:
                    messages.append({"role": "system", "content": system_prompt})
                messages.append({"role": "user", "content": prompt})

                response = await self.text_client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens
                )

                if getattr(response, "usage", None):
                    self.total_tokens += response.usage.total_tokens
                self.request_count += 1

                return response.choices[0].message.content or ""

            response = await self.text_client.post(
                "/completions",
                json={
                    "model": self.model,
                    "prompt": f"{system_prompt}\n\n{prompt}" if system_prompt else prompt,
                    "temperature": temperature,
                    "max_tokens": max_tokens
                }
            )
            response.raise_for_status()
            self.request_count += 1
            return response.json().get("text", "")

        except Exception as e:
            logger.error(f"Text generation failed: {e}")
            raise AIGenerationError(f"Text generation failed: {str(e)}", model=self.model)

    async def suggest_domains(self, keyword: str, count: int = MAX_AI_SUGGESTIONS) -> List[str]:
        """
        Ask the model for domain name ideas

        Returns:
            Up to `count` raw names, possibly with TLDs

        Raises:
            AIGenerationError: call failed or reply had no usable names
        """
        reply = await self.generate_text(
            SUGGESTION_PROMPT.format(count=count, keyword=keyword),
            system_prompt=SYSTEM_PROMPT,
            temperature=0.8,
            max_tokens=200
        )

        suggestions = parse_domain_suggestions(reply, limit=count)
        if not suggestions:
            logger.error(f"Failed to parse AI suggestions: {reply[:200]!r}")
            raise AIGenerationError("No valid suggestions generated", model=self.model)

        logger.info(f"✨ AI suggested {len(suggestions)} names for '{keyword}'")
        return suggestions

    def get_stats(self) -> Dict:
        """Get AI Manager statistics"""
        return {
            "request_count": self.request_count,
            "total_tokens": self.total_tokens,
            "model": self.model,
            "configured": self.text_client is not None
        }

    @classmethod
    async def cleanup(cls):
        """Cleanup resources"""
        if cls._instance:
            client = cls._instance.text_client
            if isinstance(client, httpx.AsyncClient):
                await client.aclose()
            elif isinstance(client, AsyncOpenAI):
                await client.close()
            cls._instance = None
            logger.info("✅ AI Manager cleaned up")
