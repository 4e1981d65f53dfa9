"""Wrapper for Google Gemini API interactions."""

from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_api_exceptions

import config
from utils.logger import get_logger
from utils.error_handler import ConfigError, GradingError

logger = get_logger()

class GeminiClient:
    """Sends chat-style prompts to a Gemini model and returns the reply text."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = config.DEFAULT_GEMINI_MODEL,
        max_output_tokens: int = config.DEFAULT_MAX_OUTPUT_TOKENS,
        temperature: float = config.DEFAULT_TEMPERATURE,
    ):
        """Initializes the GeminiClient.

        Args:
            api_key: The Gemini API key.
            model_name: Name of the Gemini model to call.
            max_output_tokens: Upper bound on the reply length.
            temperature: Sampling temperature.

        Raises:
            ConfigError: If the API key is not provided or the library cannot be configured.
        """
        logger.debug("Initializing GeminiClient...")
        if not api_key:
            logger.critical("Gemini API Key is missing. Set the GEMINI_API_KEY environment variable.")
            raise ConfigError("GEMINI_API_KEY not found or provided.")
        try:
            genai.configure(api_key=api_key)
        except Exception as e:
             logger.critical(f"Failed to configure Gemini API: {e}", exc_info=config.DEBUG)
             raise ConfigError(f"Failed to configure Gemini API: {e}") from e
        self.model_name = model_name
        self.generation_config = genai.types.GenerationConfig(
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )
        self.safety_settings = {
             genai.types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: genai.types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
             genai.types.HarmCategory.HARM_CATEGORY_HATE_SPEECH: genai.types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
             genai.types.HarmCategory.HARM_CATEGORY_HARASSMENT: genai.types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
             genai.types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: genai.types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        }
        logger.info(f"GeminiClient initialized with model: {model_name}")

    def generate_text(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Generates a reply for a single user message.

        Args:
            prompt: The user message.
            system_instruction: Optional system instruction framing the model's role.

        Returns:
            The reply text, stripped.

        Raises:
            GradingError: If the call fails, is blocked, or returns no text.
        """
        logger.info(f"Calling Gemini model {self.model_name}...")
        if config.DEBUG:
            logger.debug(f"Prompt (first 500 chars):\n{prompt[:500]}...")

        try:
            model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)
            response = model.generate_content(
                prompt,
                generation_config=self.generation_config,
                safety_settings=self.safety_settings,
            )
        except google_api_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini API error: {e}", exc_info=config.DEBUG)
            if isinstance(e, google_api_exceptions.PermissionDenied):
                 raise GradingError("Permission denied calling Gemini API (403). Check API key/permissions.") from e
            if isinstance(e, google_api_exceptions.ResourceExhausted):
                 raise GradingError("Gemini API rate limit exceeded (429).") from e
            raise GradingError(f"Gemini API error: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error calling Gemini: {e}", exc_info=config.DEBUG)
            raise GradingError(f"Unexpected error calling Gemini: {e}") from e

        if not response.candidates:
             logger.error(f"Gemini response missing candidates. Prompt feedback: {getattr(response, 'prompt_feedback', None)}")
             raise GradingError("Gemini response was empty or blocked (no candidates).")

        candidate = response.candidates[0]
        if candidate.finish_reason == genai.types.FinishReason.SAFETY:
            logger.error(f"Gemini reply stopped due to safety. Ratings: {candidate.safety_ratings}")
            raise GradingError("Gemini reply blocked by safety settings.")

        if not candidate.content or not candidate.content.parts:
             logger.error(f"Unexpected Gemini response structure or empty parts: {candidate}")
             raise GradingError("Gemini reply had no content parts.")

        text = "".join(part.text for part in candidate.content.parts if getattr(part, 'text', None))
        if not text.strip():
            logger.warning(f"Gemini returned empty text. Finish reason: {candidate.finish_reason}")
            raise GradingError("Gemini returned an empty reply.")

        logger.info(f"Received Gemini reply ({len(text)} chars).")
        return text.strip()
