"""Locates an assignment's instructions, collects its submissions and grades them."""

from typing import Any, Dict, List

import config
from core.documents import DocumentTextExtractor, document_url
from core.grader import Grader
from core.models import AssignmentGrade, AssignmentRef, StudentSubmission
from services.classroom_api import ClassroomService
from utils.logger import get_logger
from utils.error_handler import APIError, AssignmentLookupError, NoDocumentLinkError

logger = get_logger()


class AssignmentProcessor:
    """Runs the grading pass for one assignment on behalf of one caller.

    All calls are made sequentially. Only failures that prevent finding the
    instructions are raised; per-student failures degrade to empty text or
    a zero grade.
    """

    def __init__(self, classroom_service: ClassroomService, extractor: DocumentTextExtractor, grader: Grader):
        self.classroom_service = classroom_service
        self.extractor = extractor
        self.grader = grader

    def locate_instructions_url(self, course_id: str, assignment_id: str) -> str:
        """Returns the URL of the first Drive-backed material of the assignment.

        Raises:
            NoDocumentLinkError: If no material references a Drive file.
            AssignmentLookupError: If the assignment could not be fetched.
        """
        try:
            coursework = self.classroom_service.get_course_work(course_id, assignment_id)
        except APIError as e:
            logger.error(f"Error fetching assignment details for {assignment_id}: {e}")
            raise AssignmentLookupError("Failed to retrieve assignment file.") from e

        for material in coursework.get('materials', []):
            shared_file = material.get('driveFile')
            if not shared_file:
                continue
            file_id = shared_file.get('driveFile', {}).get('id')
            if file_id:
                return document_url(file_id)

        logger.error(f"Assignment {assignment_id} in course {course_id} has no Drive material.")
        raise NoDocumentLinkError("No document link found for the assignment.")

    def _student_name(self, user_id: str) -> str:
        try:
            profile = self.classroom_service.get_student_profile(user_id)
        except APIError as e:
            logger.warning(f"Could not resolve name for student {user_id}: {e}")
            return config.UNKNOWN_STUDENT_NAME
        return (profile.get('name') or {}).get('fullName') or config.UNKNOWN_STUDENT_NAME

    def _submission_text(self, submission: Dict[str, Any]) -> str:
        text = ''
        attachments = (submission.get('assignmentSubmission') or {}).get('attachments') or []
        for attachment in attachments:
            if not isinstance(attachment, dict):
                continue
            drive_file = attachment.get('driveFile')
            if not drive_file or not drive_file.get('id'):
                continue
            content = self.extractor.extract(document_url(drive_file['id']))
            if config.DEBUG:
                logger.debug(f"Extracted {len(content)} chars from attachment {drive_file['id']} of submission {submission.get('id')}.")
            text += content + '\n'
        return text.strip()

    def collect_submissions(self, course_id: str, assignment_id: str) -> List[StudentSubmission]:
        """Lists every submission with the student's name and the text of its attachments.

        Returns:
            One record per well-formed submission, or an empty list if the
            submissions could not be listed. A record that cannot be read is
            logged and skipped without affecting the others.
        """
        try:
            submissions = self.classroom_service.list_submissions(course_id, assignment_id)
        except APIError as e:
            logger.error(f"Error fetching student submissions for {assignment_id}: {e}")
            return []

        collected = []
        for i, submission in enumerate(submissions):
            try:
                user_id = submission.get('userId')
                logger.info(f"Collecting submission {i+1}/{len(submissions)} (ID: {submission.get('id')}, User: {user_id})...")
                collected.append(StudentSubmission(
                    student_id=user_id,
                    student_name=self._student_name(user_id),
                    submission_id=submission.get('id'),
                    text=self._submission_text(submission),
                ))
            except Exception as e:
                logger.error(f"Skipping malformed submission record {i+1}/{len(submissions)}: {e}", exc_info=config.DEBUG)
        return collected

    def process_assignment(self, ref: AssignmentRef) -> List[AssignmentGrade]:
        """Grades every submission of the assignment against its instructions.

        Raises:
            AssignmentLookupError: If the instructions document cannot be located.
        """
        logger.info(f"Starting processing for assignment {ref.assignment_id} in course {ref.course_id}.")
        instructions_url = self.locate_instructions_url(ref.course_id, ref.assignment_id)
        logger.info(f"Assignment file URL: {instructions_url}")

        instructions = self.extractor.extract(instructions_url)
        logger.info(f"Assignment instructions: {len(instructions)} chars.")

        submissions = self.collect_submissions(ref.course_id, ref.assignment_id)
        logger.info(f"Found {len(submissions)} student submissions.")

        results = []
        for submission in submissions:
            logger.info(f"Grading submission {submission.submission_id} for student {submission.student_name}...")
            results.append(AssignmentGrade(submission=submission, result=self.grader.grade(instructions, submission.text)))

        logger.info(f"Finished processing assignment {ref.assignment_id}. Graded {len(results)} submissions.")
        return results
