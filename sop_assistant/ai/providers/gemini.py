"""Gemini provider implementation."""

from typing import TypeVar

from braintrust.wrappers.google_genai import setup_genai
from google import genai
from google.genai import errors as genai_errors
from google.genai.types import (
    Content,
    GenerateContentConfig,
    GenerateContentResponse,
    HttpOptions,
    Part,
    ThinkingConfig,
)
from pydantic import BaseModel, ValidationError

from sop_assistant.ai.base import (
    AIProvider,
    ContentGenerationResult,
    ConversationTurn,
)
from sop_assistant.ai.gemini.config import GeminiSettings, get_gemini_settings
from sop_assistant.ai.gemini.exceptions import (
    GeminiAPIError,
    GeminiAuthenticationError,
    GeminiContentGenerationError,
    GeminiError,
)
from sop_assistant.utils.logger import logger

T = TypeVar("T", bound=BaseModel)


class GeminiProvider(AIProvider):
    """Gemini provider implementation.

    Uses Google's Gemini API for free-text and JSON-schema constrained
    generation. All calls go through the SDK's async client so concurrent
    requests interleave on the event loop.
    """

    def __init__(
        self,
        settings: GeminiSettings | None = None,
        enable_braintrust: bool = False,
        braintrust_project_name: str | None = None,
    ):
        """Initialize Gemini provider.

        Args:
            settings: Gemini settings; loaded from the environment when omitted
            enable_braintrust: Whether to enable Braintrust tracing for this provider instance
            braintrust_project_name: Braintrust project name (only used if enable_braintrust=True)
        """
        self._client: genai.Client | None = None
        self.enable_braintrust = enable_braintrust
        self.braintrust_project_name = braintrust_project_name
        self.settings = settings or get_gemini_settings()

    def _get_client(self) -> genai.Client:
        """Get or create the Gemini client.

        Automatically sets up Braintrust tracing if enabled.
        """
        if self._client is None:
            try:
                if self.enable_braintrust and self.braintrust_project_name:
                    logger.info(
                        f"Setting up Gemini with Braintrust tracing enabled (project: {self.braintrust_project_name})"
                    )
                    setup_genai(project_name=self.braintrust_project_name)

                self._client = genai.Client(
                    api_key=self.settings.api_key.strip(),
                    http_options=HttpOptions(timeout=self.settings.timeout * 1000),
                )
                logger.info("Gemini client initialized")
            except Exception as e:
                logger.error("Failed to initialize Gemini client", error=str(e))
                raise GeminiAuthenticationError(f"Failed to authenticate: {e}")
        return self._client

    def _build_config(self, **overrides) -> GenerateContentConfig:
        """Merge settings defaults with per-call overrides into a generation config."""
        temperature = overrides.pop("temperature", None)
        if temperature is None:
            temperature = self.settings.temperature
        thinking_budget = overrides.pop("thinking_budget", None)
        if thinking_budget is None:
            thinking_budget = self.settings.thinking_budget

        config = {key: value for key, value in overrides.items() if value is not None}
        if temperature is not None:
            config["temperature"] = temperature
        if thinking_budget is not None:
            config["thinking_config"] = ThinkingConfig(thinking_budget=thinking_budget)
        return GenerateContentConfig(**config)

    async def _generate(
        self, contents, config: GenerateContentConfig, model_name: str
    ) -> GenerateContentResponse:
        client = self._get_client()
        logger.info("Generating content with model", model_name=model_name)
        try:
            return await client.aio.models.generate_content(
                model=model_name, contents=contents, config=config
            )
        except genai_errors.APIError as e:
            logger.error(
                "Gemini API returned an error", status_code=e.code, error=str(e)
            )
            raise GeminiAPIError(f"Gemini API error: {e}", status_code=e.code) from e

    async def generate_content(
        self,
        prompt: str,
        system_instruction: str | None = None,
        **kwargs,
    ) -> ContentGenerationResult:
        """Generate text content using Gemini.

        Args:
            prompt: Text prompt
            system_instruction: Optional system prompt
            **kwargs: Additional options (temperature, thinking_budget, model)

        Returns:
            ContentGenerationResult: Generated content

        Raises:
            GeminiError: If the request fails
        """
        try:
            model_name = kwargs.pop("model", None) or self.settings.model_name
            config = self._build_config(system_instruction=system_instruction, **kwargs)

            response = await self._generate(prompt, config, model_name)

            return ContentGenerationResult(
                text=response.text or "",
                usage=response.usage_metadata.model_dump()
                if response.usage_metadata
                else None,
                finish_reason=_finish_reason(response),
            )

        except Exception as e:
            logger.error("Content generation failed", error=str(e))
            if isinstance(e, GeminiError):
                raise
            raise GeminiError(f"Content generation failed: {e}")

    async def generate_structured_content(
        self,
        system_instruction: str,
        conversation: list[ConversationTurn],
        response_model: type[T],
        **kwargs,
    ) -> T:
        """Generate structured content using a Pydantic model.

        The model's JSON schema is sent as the response schema so the reply
        is parsed by deserialization alone.

        Args:
            system_instruction: System prompt
            conversation: Ordered conversation history
            response_model: Pydantic model for structured output
            **kwargs: Additional options (temperature, thinking_budget, model)

        Returns:
            Instance of response_model with generated data

        Raises:
            GeminiContentGenerationError: If the reply is empty or does not match the schema
            GeminiError: If the request fails
        """
        try:
            model_name = kwargs.pop("model", None) or self.settings.model_name
            config = self._build_config(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                response_json_schema=response_model.model_json_schema(by_alias=True),
                **kwargs,
            )
            contents = [
                Content(role=turn.role.value, parts=[Part.from_text(text=turn.text)])
                for turn in conversation
            ]

            response = await self._generate(contents, config, model_name)

            if not response.text:
                logger.error(
                    "Structured response text is empty",
                    finish_reason=_finish_reason(response),
                )
                raise GeminiContentGenerationError("Empty response from Gemini API")

            logger.debug("Response text", text_preview=response.text[:500])
            try:
                return response_model.model_validate_json(response.text)
            except ValidationError as e:
                logger.error(
                    "Failed to parse structured response",
                    error=str(e),
                    text=response.text,
                )
                raise GeminiContentGenerationError(
                    f"Failed to parse structured response: {e}"
                ) from e

        except Exception as e:
            logger.error("Structured content generation failed", error=str(e))
            if isinstance(e, GeminiError):
                raise
            raise GeminiError(f"Structured content generation failed: {e}")


def _finish_reason(response: GenerateContentResponse) -> str | None:
    if not response.candidates:
        return None
    reason = response.candidates[0].finish_reason
    return str(reason) if reason is not None else None
