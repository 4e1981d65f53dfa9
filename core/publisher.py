"""Writes reviewed grades back to Classroom and returns the submissions to students."""

from typing import Iterable, List

from core.models import AssignmentRef, GradedSubmission, PublishOutcome
from services.classroom_api import ClassroomService
from utils.logger import get_logger
from utils.error_handler import APIError

logger = get_logger()


class GradePublisher:
    """Publishes a batch of grades, one submission at a time.

    Patching the grade and returning the submission are treated as a single
    unit per item. A failing item is reported in its outcome and never stops
    the rest of the batch.
    """

    def __init__(self, classroom_service: ClassroomService):
        self.classroom_service = classroom_service

    def publish_one(self, ref: AssignmentRef, item: GradedSubmission) -> PublishOutcome:
        if not item.submission_id:
            logger.error("Skipping graded submission without a submissionId.")
            return PublishOutcome(item.submission_id, item.grade, item.feedback, success=False,
                                  error="Missing submissionId")

        logger.info(f"Processing submission {item.submission_id} with grade {item.grade}.")
        try:
            self.classroom_service.patch_grade(ref.course_id, ref.assignment_id, item.submission_id, item.grade)
            self.classroom_service.return_submission(ref.course_id, ref.assignment_id, item.submission_id)
        except APIError as e:
            error = e.details or str(e)
            logger.error(f"Error processing submission {item.submission_id}: {error}")
            return PublishOutcome(item.submission_id, item.grade, item.feedback, success=False, error=error)
        return PublishOutcome(item.submission_id, item.grade, item.feedback, success=True)

    def publish(self, ref: AssignmentRef, items: Iterable[GradedSubmission]) -> List[PublishOutcome]:
        """Publishes every item in order.

        Returns:
            One outcome per item, in input order.
        """
        outcomes = [self.publish_one(ref, item) for item in items]
        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(f"All submissions processed for assignment {ref.assignment_id}: "
                    f"{len(outcomes) - failed} succeeded, {failed} failed.")
        return outcomes
