"""Wrapper for Google Drive API interactions."""

import io

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload
from google.oauth2.credentials import Credentials

import config
from utils.logger import get_logger
from utils.error_handler import APIError, ContentExtractionError
from api_clients import build_service

logger = get_logger()

PLAIN_TEXT_MIME_TYPE = "text/plain"

class DriveService:
    """Provides methods to interact with the Google Drive API."""

    SERVICE_NAME = 'drive'
    VERSION = 'v3'

    def __init__(self, credentials: Credentials):
        """Initializes the DriveService.

        Args:
            credentials: Credentials wrapping the caller's bearer token.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Drive service cannot be built.
        """
        logger.debug("Initializing DriveService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)

    def export_text(self, file_id: str) -> str:
        """Exports a Google Document as plain text.

        Args:
            file_id: The Drive ID of the document.

        Returns:
            The document text, decoded as UTF-8. Not trimmed.

        Raises:
            APIError: If the export request fails (including 404 and 403).
            ContentExtractionError: If the download or decoding fails for other reasons.
        """
        logger.info(f"Exporting file ID {file_id} as {PLAIN_TEXT_MIME_TYPE}...")
        try:
            request = self.service.files().export_media(
                fileId=file_id,
                mimeType=PLAIN_TEXT_MIME_TYPE
            )

            fh = io.BytesIO()
            downloader = MediaIoBaseDownload(fh, request)
            done = False
            while not done:
                status, done = downloader.next_chunk()
                if config.DEBUG and status:
                    logger.debug(f"Export progress: {int(status.progress() * 100)}%")

            content = fh.getvalue()
            logger.info(f"Successfully exported {len(content)} bytes for file {file_id}.")
            # Text exports start with a byte-order mark
            return content.decode('utf-8-sig')

        except HttpError as e:
            logger.error(f"Failed to export file {file_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            if e.resp.status == 403:
                 logger.warning(f"Permission denied (403) exporting file {file_id}. Check file access permissions.")
            raise APIError.from_http_error(f"Failed to export file {file_id}", e, self.SERVICE_NAME) from e
        except UnicodeDecodeError as e:
            logger.error(f"Exported content of file {file_id} is not valid UTF-8: {e}")
            raise ContentExtractionError(f"Could not decode exported file {file_id} as text.") from e
        except Exception as e:
            logger.error(f"Unexpected error exporting file {file_id}: {e}", exc_info=config.DEBUG)
            raise ContentExtractionError(f"Unexpected error exporting file {file_id}: {e}") from e
