"""Factory function for creating Google API service clients."""

from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

import config
from utils.logger import get_logger
from utils.error_handler import APIError, AuthenticationError

logger = get_logger()

def build_service(service_name: str, version: str, credentials: Credentials) -> Resource:
    """Builds and returns a Google API service client.

    Services are built per request because every request carries its own
    bearer credential. The bundled static discovery documents are used, so
    building does not hit the network.

    Args:
        service_name: The name of the service (e.g., 'classroom', 'drive').
        version: The version of the service (e.g., 'v1', 'v3').
        credentials: OAuth 2.0 credentials wrapping the caller's token.

    Returns:
        Resource: The Google API service client resource object.

    Raises:
        AuthenticationError: If credentials are invalid or expired.
        APIError: If the service fails to build.
    """
    if not credentials or not credentials.valid:
        logger.error(f"Attempted to build service '{service_name}' with invalid credentials.")
        raise AuthenticationError(f"Invalid or expired credentials provided for service '{service_name}'.")

    logger.debug(f"Building service client for {service_name} {version}...")
    try:
        service = build(service_name, version, credentials=credentials, cache_discovery=False)
        logger.debug(f"Built service client for {service_name} {version}.")
        return service
    except HttpError as e:
        logger.error(
            f"Failed to build service '{service_name}' {version} due to HTTP error: {e.resp.status} {e.content}",
            exc_info=config.DEBUG
        )
        raise APIError.from_http_error(f"Failed to build service '{service_name}' {version}", e, service_name) from e
    except Exception as e:
        logger.error(
            f"An unexpected error occurred while building service '{service_name}' {version}: {e}",
            exc_info=config.DEBUG
        )
        raise APIError(f"Unexpected error building service '{service_name}': {e}", service=service_name) from e
