"""Grades a single submission with a language model."""

import textwrap
from typing import Callable, Optional

import config
from core.models import GradeResult
from core.parsing import ReplyParser, RegexReplyParser
from services.gemini_ai import GeminiClient
from utils.logger import get_logger

logger = get_logger()

MIN_SUBMISSION_LENGTH = 10
NON_ANSWERS = ("i don't know",)

INSUFFICIENT_SUBMISSION_FEEDBACK = (
    "The submission is blank, too short, or does not contain relevant content. "
    "Please ensure you follow the assignment instructions and provide a complete response."
)
GRADING_FAILED_FEEDBACK = "Grading failed."


def is_insufficient(submission_text: Optional[str]) -> bool:
    """True for submissions that are not worth sending to the model."""
    if not submission_text:
        return True
    stripped = submission_text.strip()
    return stripped.lower() in NON_ANSWERS or len(stripped) < MIN_SUBMISSION_LENGTH


class Grader:
    """Scores submissions against assignment instructions.

    ``grade`` never raises: degenerate submissions, model failures and
    unparseable replies all degrade to a grade of 0 with an explanatory
    feedback string. When built with ``client_provider`` the model client
    is only created on the first submission that needs it, and a failure
    to create it counts as a model failure.
    """

    def __init__(
        self,
        llm_client: Optional[GeminiClient] = None,
        parser: Optional[ReplyParser] = None,
        clamp_to_max: bool = False,
        system_instruction: str = config.GRADING_SYSTEM_INSTRUCTION,
        prompt_template: str = config.GRADING_PROMPT_TEMPLATE,
        client_provider: Optional[Callable[[], GeminiClient]] = None,
    ):
        if llm_client is None and client_provider is None:
            raise ValueError("Grader needs an llm_client or a client_provider.")
        self.llm_client = llm_client
        self.client_provider = client_provider
        self.parser = parser or RegexReplyParser()
        self.clamp_to_max = clamp_to_max
        self.system_instruction = system_instruction
        self.prompt_template = prompt_template

    def _client(self) -> GeminiClient:
        # Called inside grade()'s guard; a provider error becomes "Grading failed."
        if self.llm_client is None:
            self.llm_client = self.client_provider()
        return self.llm_client

    def build_prompt(self, instructions: str, submission_text: str) -> str:
        return self.prompt_template.format(instructions=instructions, submission=submission_text)

    def grade(self, instructions: str, submission_text: Optional[str]) -> GradeResult:
        """Grades one submission.

        Args:
            instructions: The assignment instructions text.
            submission_text: The student's submission text.

        Returns:
            The grade (a non-negative integer) and feedback.
        """
        if is_insufficient(submission_text):
            logger.info("Submission is blank, too short or a non-answer; skipping model call.")
            return GradeResult(grade=0, feedback=INSUFFICIENT_SUBMISSION_FEEDBACK)

        if config.DEBUG:
            logger.debug(f"Submission preview: {textwrap.shorten(submission_text, width=200)}")

        try:
            reply = self._client().generate_text(
                self.build_prompt(instructions, submission_text),
                system_instruction=self.system_instruction,
            )
        except Exception as e:
            logger.error(f"Error grading submission: {e}", exc_info=config.DEBUG)
            return GradeResult(grade=0, feedback=GRADING_FAILED_FEEDBACK)

        if config.DEBUG:
            logger.debug(f"Model reply preview: {textwrap.shorten(reply, width=200)}")

        parsed = self.parser.parse(reply)
        grade = parsed.grade
        if self.clamp_to_max and parsed.max_grade is not None and grade > parsed.max_grade:
            logger.warning(f"Model returned grade {grade} above its stated maximum {parsed.max_grade}; clamping.")
            grade = parsed.max_grade
        return GradeResult(grade=max(0, grade), feedback=parsed.feedback)
