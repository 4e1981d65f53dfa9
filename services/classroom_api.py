"""Wrapper for Google Classroom API interactions."""

from typing import List, Dict, Any

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

import config
from utils.logger import get_logger
from utils.error_handler import APIError
from api_clients import build_service

logger = get_logger()

class ClassroomService:
    """Provides methods to interact with the Google Classroom API."""

    SERVICE_NAME = 'classroom'
    VERSION = 'v1'

    def __init__(self, credentials: Credentials, page_size: int = config.DEFAULT_PAGE_SIZE):
        """Initializes the ClassroomService.

        Args:
            credentials: Credentials wrapping the caller's bearer token.
            page_size: Number of items to fetch per page on list calls.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Classroom service cannot be built.
        """
        logger.debug("Initializing ClassroomService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        self.page_size = page_size

    def get_course_work(self, course_id: str, coursework_id: str) -> Dict[str, Any]:
        """Gets a single courseWork (assignment) including its materials.

        Args:
            course_id: The ID of the course.
            coursework_id: The ID of the assignment (courseWork).

        Returns:
            The courseWork object.

        Raises:
            APIError: If the API call fails.
        """
        logger.info(f"Fetching assignment {coursework_id} in course {course_id}...")
        try:
            coursework = self.service.courses().courseWork().get(
                courseId=course_id,
                id=coursework_id
            ).execute()
            logger.debug(f"Fetched assignment '{coursework.get('title')}' with {len(coursework.get('materials', []))} materials.")
            return coursework
        except HttpError as e:
            logger.error(f"Failed to get assignment {coursework_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError.from_http_error(f"Failed to get assignment {coursework_id}", e, self.SERVICE_NAME) from e
        except Exception as e:
            logger.error(f"Unexpected error getting assignment {coursework_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error getting assignment: {e}", service=self.SERVICE_NAME) from e

    def list_submissions(self, course_id: str, coursework_id: str) -> List[Dict[str, Any]]:
        """Lists student submissions for a specific assignment.

        Args:
            course_id: The ID of the course.
            coursework_id: The ID of the assignment (courseWork).

        Returns:
            A list of studentSubmission objects, across all pages.

        Raises:
            APIError: If any page request fails.
        """
        logger.info(f"Fetching submissions for assignment {coursework_id} in course {course_id}...")
        submissions = []
        page_token = None
        try:
            while True:
                response = self.service.courses().courseWork().studentSubmissions().list(
                    courseId=course_id,
                    courseWorkId=coursework_id,
                    pageSize=self.page_size,
                    pageToken=page_token
                ).execute()

                found_submissions = response.get('studentSubmissions', [])
                if config.DEBUG:
                    logger.debug(f"Fetched page with {len(found_submissions)} submissions.")
                submissions.extend(found_submissions)

                page_token = response.get('nextPageToken')
                if not page_token:
                    break

            logger.info(f"Successfully fetched {len(submissions)} submissions for assignment {coursework_id}.")
            return submissions

        except HttpError as e:
            logger.error(f"Failed to list submissions for assignment {coursework_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError.from_http_error(f"Failed to list submissions for assignment {coursework_id}", e, self.SERVICE_NAME) from e
        except Exception as e:
             logger.error(f"Unexpected error listing submissions for assignment {coursework_id}: {e}", exc_info=config.DEBUG)
             raise APIError(f"Unexpected error listing submissions: {e}", service=self.SERVICE_NAME) from e

    def get_student_profile(self, user_id: str) -> Dict[str, Any]:
        """Gets a student's profile information.

        Args:
            user_id: The numeric ID of the student.

        Returns:
            The userProfile object; the display name lives under ``name.fullName``.

        Raises:
            APIError: If the API call fails.
        """
        logger.debug(f"Fetching profile for user ID: {user_id}...")
        try:
            profile = self.service.userProfiles().get(userId=user_id).execute()
            logger.debug(f"Successfully fetched profile for user {user_id}.")
            return profile
        except HttpError as e:
            logger.error(f"Failed to get profile for user {user_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            if e.resp.status == 403:
                 logger.warning(f"Permission denied getting profile for user {user_id}. Check token scopes.")
            raise APIError.from_http_error(f"Failed to get profile for user {user_id}", e, self.SERVICE_NAME) from e
        except Exception as e:
             logger.error(f"Unexpected error getting profile for user {user_id}: {e}", exc_info=config.DEBUG)
             raise APIError(f"Unexpected error getting user profile: {e}", service=self.SERVICE_NAME) from e

    def patch_grade(self, course_id: str, coursework_id: str, submission_id: str, grade: float | int) -> Dict[str, Any]:
        """Patches the assigned grade for a student submission.

        Note: the student only sees the grade once the submission is returned.

        Args:
            course_id: The ID of the course.
            coursework_id: The ID of the assignment.
            submission_id: The ID of the student submission.
            grade: The numerical grade to assign.

        Returns:
            The updated studentSubmission object.

        Raises:
            APIError: If the API call fails.
        """
        logger.debug(f"Patching grade for submission {submission_id} in assignment {coursework_id} to {grade}.")
        try:
            response = self.service.courses().courseWork().studentSubmissions().patch(
                courseId=course_id,
                courseWorkId=coursework_id,
                id=submission_id,
                updateMask="assignedGrade",
                body={'assignedGrade': grade}
            ).execute()
            logger.info(f"Successfully patched grade for submission {submission_id} to {grade}.")
            return response
        except HttpError as e:
            logger.error(f"Failed to patch grade for submission {submission_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError.from_http_error(f"Failed to patch grade for submission {submission_id}", e, self.SERVICE_NAME) from e
        except Exception as e:
             logger.error(f"Unexpected error patching grade for submission {submission_id}: {e}", exc_info=config.DEBUG)
             raise APIError(f"Unexpected error patching grade: {e}", service=self.SERVICE_NAME) from e

    def return_submission(self, course_id: str, coursework_id: str, submission_id: str) -> Dict[str, Any]:
        """Returns a student submission, releasing the assigned grade to the student.

        Args:
            course_id: The ID of the course.
            coursework_id: The ID of the assignment.
            submission_id: The ID of the student submission.

        Returns:
            An empty dictionary upon success (as per API spec).

        Raises:
            APIError: If the API call fails.
        """
        logger.debug(f"Returning submission {submission_id} in assignment {coursework_id}.")
        try:
            response = self.service.courses().courseWork().studentSubmissions().return_(
                courseId=course_id,
                courseWorkId=coursework_id,
                id=submission_id,
                body={}
            ).execute()
            logger.info(f"Successfully returned submission {submission_id}.")
            return response
        except HttpError as e:
            logger.error(f"Failed to return submission {submission_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError.from_http_error(f"Failed to return submission {submission_id}", e, self.SERVICE_NAME) from e
        except Exception as e:
             logger.error(f"Unexpected error returning submission {submission_id}: {e}", exc_info=config.DEBUG)
             raise APIError(f"Unexpected error returning submission: {e}", service=self.SERVICE_NAME) from e
