"""Parsing of free-text grading replies.

The model is asked to answer with a ``Grade: <score>/<max>`` line and a
``Feedback: <text>`` section. Both are extracted independently; whatever is
missing falls back to a default. Any object with a ``parse(reply)`` method
returning a ``ParsedReply`` can replace ``RegexReplyParser``, e.g. a parser
for structured JSON output.
"""

import re
from dataclasses import dataclass
from typing import Optional, Protocol

NO_FEEDBACK_MESSAGE = "No detailed feedback provided."

# Markdown bold/italic markers are tolerated around the labels.
GRADE_PATTERN = re.compile(r'Grade:[\s*_]*(\d+)\s*/\s*(\d+)', re.IGNORECASE)
FEEDBACK_PATTERN = re.compile(r'Feedback:[*_]*\s*(.*)', re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class ParsedReply:
    grade: int
    max_grade: Optional[int]
    feedback: str


class ReplyParser(Protocol):
    def parse(self, reply: str) -> ParsedReply:
        ...


class RegexReplyParser:
    """Extracts grade and feedback with the two documented patterns."""

    def parse(self, reply: str) -> ParsedReply:
        grade_match = GRADE_PATTERN.search(reply or '')
        if grade_match:
            grade = int(grade_match.group(1))
            max_grade = int(grade_match.group(2))
        else:
            grade, max_grade = 0, None

        feedback_match = FEEDBACK_PATTERN.search(reply or '')
        feedback = feedback_match.group(1).strip() if feedback_match else ''
        return ParsedReply(grade=grade, max_grade=max_grade, feedback=feedback or NO_FEEDBACK_MESSAGE)
