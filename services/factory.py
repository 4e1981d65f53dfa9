"""Creates the service clients a request needs."""

import threading
from typing import Optional

import config
from auth import credentials_from_token
from services.classroom_api import ClassroomService
from services.drive_api import DriveService
from services.gemini_ai import GeminiClient


class ServiceFactory:
    """Builds Google API clients per request and the Gemini client once.

    Classroom and Drive clients are bound to the caller's bearer token, so
    they cannot be shared between requests. The Gemini client depends only
    on configuration and is created lazily on first use; creation is guarded
    by a lock so concurrent requests share a single instance.
    """

    def __init__(self, settings: config.Settings):
        self.settings = settings
        self._gemini_client: Optional[GeminiClient] = None
        self._gemini_lock = threading.Lock()

    def classroom(self, access_token: str) -> ClassroomService:
        return ClassroomService(credentials_from_token(access_token), page_size=self.settings.page_size)

    def drive(self, access_token: str) -> DriveService:
        return DriveService(credentials_from_token(access_token))

    def gemini(self) -> GeminiClient:
        """Returns the shared Gemini client.

        Raises:
            ConfigError: If no Gemini API key is configured.
        """
        if self._gemini_client is None:
            with self._gemini_lock:
                if self._gemini_client is None:
                    self._gemini_client = GeminiClient(
                        api_key=self.settings.gemini_api_key,
                        model_name=self.settings.gemini_model,
                        max_output_tokens=self.settings.max_output_tokens,
                        temperature=self.settings.temperature,
                    )
        return self._gemini_client
