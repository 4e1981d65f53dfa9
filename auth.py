"""Handles the caller-supplied OAuth 2.0 bearer credential.

The relay never issues or refreshes tokens. The access token arrives in the
``Authorization`` header of each request and is forwarded verbatim to the
Google APIs for the lifetime of that request only.
"""

from typing import Optional

from google.oauth2.credentials import Credentials

from utils.logger import get_logger
from utils.error_handler import AuthenticationError

logger = get_logger()

BEARER_PREFIX = "bearer"

def extract_bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    """Extracts the token from an ``Authorization: Bearer <token>`` header value.

    Args:
        authorization_header: The raw header value, or None if absent.

    Returns:
        The token string, or None if the header is missing or malformed.
    """
    if not authorization_header:
        return None
    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_PREFIX:
        logger.debug("Authorization header present but not in 'Bearer <token>' form.")
        return None
    return parts[1]

def credentials_from_token(access_token: str) -> Credentials:
    """Wraps a bare access token into credentials usable by googleapiclient.

    No refresh token or client secrets are attached, so the credentials
    stay valid exactly as long as the caller's token does.

    Raises:
        AuthenticationError: If the token is empty.
    """
    if not access_token:
        raise AuthenticationError("Missing access token.")
    return Credentials(token=access_token)
