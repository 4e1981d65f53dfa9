"""Request-scoped value types passed between the relay's components."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AssignmentRef:
    course_id: str
    assignment_id: str


@dataclass(frozen=True)
class StudentSubmission:
    """One student's submission with the text of all its attached documents."""
    student_id: str
    student_name: str
    submission_id: str
    text: str


@dataclass(frozen=True)
class GradeResult:
    grade: int
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        return {'grade': self.grade, 'feedback': self.feedback}


@dataclass(frozen=True)
class GradedSubmission:
    """A grade the caller wants written back to Classroom."""
    submission_id: Optional[str]
    grade: Any
    feedback: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GradedSubmission":
        return cls(
            submission_id=data.get('submissionId'),
            grade=data.get('grade'),
            feedback=data.get('feedback'),
        )


@dataclass(frozen=True)
class PublishOutcome:
    submission_id: Optional[str]
    grade: Any
    feedback: Any
    success: bool
    error: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'submissionId': self.submission_id,
            'grade': self.grade,
            'feedback': self.feedback,
            'success': self.success,
            'error': self.error,
        }


@dataclass(frozen=True)
class AssignmentGrade:
    """Grading Engine output for one collected submission."""
    submission: StudentSubmission
    result: GradeResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'studentName': self.submission.student_name,
            'studentId': self.submission.student_id,
            'submissionId': self.submission.submission_id,
            'gradeAndFeedback': self.result.to_dict(),
        }
