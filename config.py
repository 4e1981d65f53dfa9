"""Configuration settings for the Classroom Grading Relay."""

import os
import logging
from dataclasses import dataclass
from typing import Final, Optional


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# Debug flag: on = verbose logging, tracebacks and the Flask debugger; off = production mode.
# Read once at import; the only source of the debug setting.
DEBUG: Final[bool] = _env_flag("GRADER_DEBUG")

# --- Google API Settings ---

# Base URL used to turn Drive file ids into document links
DOCUMENT_URL_TEMPLATE: Final[str] = "https://docs.google.com/document/d/{file_id}"

# Pagination size for Classroom list calls
DEFAULT_PAGE_SIZE: Final[int] = int(os.environ.get("CLASSROOM_PAGE_SIZE", "50"))

# Display name used when a student profile has no full name
UNKNOWN_STUDENT_NAME: Final[str] = "Unknown Student"

# --- Gemini AI Settings ---

DEFAULT_GEMINI_MODEL: Final[str] = "gemini-1.5-flash-latest"
DEFAULT_MAX_OUTPUT_TOKENS: Final[int] = 500
DEFAULT_TEMPERATURE: Final[float] = 0.7

GRADING_SYSTEM_INSTRUCTION: Final[str] = (
    "You are a strict professor grading student assignments accurately. "
    "Provide a numeric grade and detailed feedback separately. If the submission is irrelevant, "
    "too short, or does not address the assignment instructions, give a grade of 0 and provide "
    "feedback explaining why. The feedback should not exceed more than 3 lines."
)

GRADING_PROMPT_TEMPLATE: Final[str] = """Assignment Instructions: {instructions}

Student Submission: {submission}

Evaluate the submission and return the grade and feedback separately, using exactly this format:
Grade: <score>/100
Feedback: <feedback>

If the submission is irrelevant, too short, or does not address the assignment instructions, give a grade of 0 and provide feedback explaining why."""

# --- Server Settings ---

DEFAULT_PORT: Final[int] = 5000

# --- Logging Configuration ---
LOG_DIR: Final[str] = "logs"
LOG_FILE: Final[str] = os.path.join(LOG_DIR, "relay.log")
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
# Structured log format: timestamp, level, logger, module.function:line, message
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once at startup and injected into the app."""

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    clamp_grades: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
    port: int = DEFAULT_PORT
    cors_origins: str = "*"

    @classmethod
    def from_env(cls) -> "Settings":
        """Builds settings from environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or None,
            gemini_model=os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            max_output_tokens=int(os.environ.get("GRADER_MAX_OUTPUT_TOKENS", str(DEFAULT_MAX_OUTPUT_TOKENS))),
            temperature=float(os.environ.get("GRADER_TEMPERATURE", str(DEFAULT_TEMPERATURE))),
            clamp_grades=_env_flag("GRADER_CLAMP_GRADES"),
            page_size=int(os.environ.get("CLASSROOM_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
            port=int(os.environ.get("PORT", str(DEFAULT_PORT))),
            cors_origins=os.environ.get("CORS_ORIGINS", "*"),
        )


# Basic check
if __name__ == "__main__":
    settings = Settings.from_env()
    print(f"Debug Mode: {'On' if DEBUG else 'Off'}")
    print(f"Log Level: {logging.getLevelName(LOG_LEVEL)}")
    print(f"Log File: {LOG_FILE}")
    print(f"Gemini API Key Loaded: {'Yes' if settings.gemini_api_key else 'No'}")
    print(f"Gemini Model: {settings.gemini_model}")
    print(f"Clamp Grades: {settings.clamp_grades}")
    print(f"Page Size: {settings.page_size}")
    print(f"Port: {settings.port}")
