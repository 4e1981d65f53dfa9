"""HTTP endpoints for processing assignments and publishing grades."""

from flask import Blueprint, current_app, jsonify, request

import config
from auth import extract_bearer_token
from core.assignment import AssignmentProcessor
from core.documents import DocumentTextExtractor
from core.grader import Grader
from core.models import AssignmentRef, GradedSubmission
from core.publisher import GradePublisher
from utils.logger import get_logger
from utils.error_handler import BaseGraderException

logger = get_logger()

relay_bp = Blueprint('relay', __name__)

MISSING_FIELDS_ERROR = "Missing required fields"


def _missing_fields():
    return jsonify({'error': MISSING_FIELDS_ERROR}), 400


@relay_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@relay_bp.route('/new-assignment', methods=['POST'])
def new_assignment():
    """Grade every submission of an assignment with the language model."""
    data = request.get_json(silent=True) or {}
    course_id = data.get('courseId')
    assignment_id = data.get('assignmentId')
    access_token = extract_bearer_token(request.headers.get('Authorization'))

    if not course_id or not assignment_id or not access_token:
        logger.warning("Rejected /new-assignment request: missing required fields.")
        return _missing_fields()

    settings = current_app.config['SETTINGS']
    factory = current_app.config['SERVICE_FACTORY']
    try:
        processor = AssignmentProcessor(
            factory.classroom(access_token),
            DocumentTextExtractor(factory.drive(access_token)),
            Grader(client_provider=factory.gemini, clamp_to_max=settings.clamp_grades),
        )
        results = processor.process_assignment(AssignmentRef(course_id, assignment_id))
    except BaseGraderException as e:
        logger.error(f"Error processing assignment {assignment_id}: {e}", exc_info=config.DEBUG)
        return jsonify({'error': str(e)}), 500
    except Exception as e:
        logger.critical(f"Unexpected error processing assignment {assignment_id}: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Internal server error'}), 500

    return jsonify({
        'message': 'Assignment processed successfully',
        'results': [result.to_dict() for result in results],
    }), 200


@relay_bp.route('/post-grades', methods=['POST'])
def post_grades():
    """Write reviewed grades to Classroom and return the submissions."""
    data = request.get_json(silent=True) or {}
    course_id = data.get('courseId')
    assignment_id = data.get('assignmentId')
    graded_submissions = data.get('gradedSubmissions')
    access_token = extract_bearer_token(request.headers.get('Authorization'))

    logger.info(f"Received request to post grades for assignment {assignment_id} in course {course_id}.")

    if not course_id or not assignment_id or graded_submissions is None or not access_token:
        logger.warning("Rejected /post-grades request: missing required fields.")
        return _missing_fields()
    if not isinstance(graded_submissions, list):
        return jsonify({'error': 'gradedSubmissions must be a list'}), 400

    factory = current_app.config['SERVICE_FACTORY']
    try:
        publisher = GradePublisher(factory.classroom(access_token))
        items = [GradedSubmission.from_dict(item if isinstance(item, dict) else {}) for item in graded_submissions]
        outcomes = publisher.publish(AssignmentRef(course_id, assignment_id), items)
    except Exception as e:
        logger.error(f"General error posting grades: {e}", exc_info=config.DEBUG)
        return jsonify({'error': str(e) or 'Internal server error'}), 500

    return jsonify({
        'message': 'Grades posting complete',
        'results': [outcome.to_dict() for outcome in outcomes],
    }), 200
