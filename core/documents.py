"""Resolves document links and extracts their text through the Drive export API."""

import re
from typing import Optional

import config
from services.drive_api import DriveService
from utils.logger import get_logger
from utils.error_handler import ContentExtractionError

logger = get_logger()

DOCUMENT_ID_PATTERN = re.compile(r'/d/([^/]+)')

def resolve_document_id(url: Optional[str]) -> Optional[str]:
    """Returns the id in a ``.../d/<id>/...`` document URL, or None if there is none."""
    if not url:
        return None
    match = DOCUMENT_ID_PATTERN.search(url)
    return match.group(1) if match else None

def document_url(file_id: str) -> str:
    """Builds the document URL for a Drive file id."""
    return config.DOCUMENT_URL_TEMPLATE.format(file_id=file_id)


class DocumentTextExtractor:
    """Turns a document URL into its plain-text contents.

    Extraction never fails from the caller's point of view: an unreadable
    document yields an empty string so the rest of the assignment can still
    be processed.
    """

    def __init__(self, drive_service: DriveService):
        self.drive_service = drive_service

    def extract(self, url: str) -> str:
        try:
            file_id = resolve_document_id(url)
            if not file_id:
                raise ContentExtractionError(f"Invalid document URL: {url}")
            return self.drive_service.export_text(file_id).strip()
        except Exception as e:
            logger.error(f"Error extracting text from {url}: {e}", exc_info=config.DEBUG)
            return ''
