"""
Test: Classroom and Gemini service wrappers with the client libraries mocked out.
"""
import threading
import time
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from services.classroom_api import ClassroomService
from services.factory import ServiceFactory
from services.gemini_ai import GeminiClient
from utils.error_handler import APIError, ConfigError, GradingError


@pytest.fixture
def classroom_service():
    with patch("services.classroom_api.build_service") as build:
        build.return_value = MagicMock()
        yield ClassroomService(credentials=MagicMock(), page_size=2)


def submissions_api(service):
    return service.service.courses().courseWork().studentSubmissions()


class TestClassroomService:
    def test_get_course_work(self, classroom_service):
        course_work_api = classroom_service.service.courses().courseWork()
        course_work_api.get().execute.return_value = {"id": "cw1", "materials": []}
        assert classroom_service.get_course_work("c1", "cw1") == {"id": "cw1", "materials": []}
        course_work_api.get.assert_called_with(courseId="c1", id="cw1")

    def test_get_course_work_http_error(self, classroom_service, http_error):
        classroom_service.service.courses().courseWork().get().execute.side_effect = http_error(404)
        with pytest.raises(APIError) as excinfo:
            classroom_service.get_course_work("c1", "cw1")
        assert excinfo.value.status_code == 404
        assert excinfo.value.details == {"error": {"code": 404, "message": "boom"}}

    def test_list_submissions_follows_pages(self, classroom_service):
        submissions_api(classroom_service).list().execute.side_effect = [
            {"studentSubmissions": [{"id": "s1"}, {"id": "s2"}], "nextPageToken": "p2"},
            {"studentSubmissions": [{"id": "s3"}]},
        ]
        result = classroom_service.list_submissions("c1", "cw1")
        assert [s["id"] for s in result] == ["s1", "s2", "s3"]
        submissions_api(classroom_service).list.assert_called_with(
            courseId="c1", courseWorkId="cw1", pageSize=2, pageToken="p2")

    def test_list_submissions_empty(self, classroom_service):
        submissions_api(classroom_service).list().execute.return_value = {}
        assert classroom_service.list_submissions("c1", "cw1") == []

    def test_get_student_profile(self, classroom_service):
        classroom_service.service.userProfiles().get().execute.return_value = {"name": {"fullName": "Bo"}}
        assert classroom_service.get_student_profile("u1")["name"]["fullName"] == "Bo"

    def test_get_student_profile_forbidden(self, classroom_service, http_error):
        classroom_service.service.userProfiles().get().execute.side_effect = http_error(403)
        with pytest.raises(APIError) as excinfo:
            classroom_service.get_student_profile("u1")
        assert excinfo.value.status_code == 403

    def test_patch_grade(self, classroom_service):
        classroom_service.patch_grade("c1", "cw1", "s1", 77)
        submissions_api(classroom_service).patch.assert_called_with(
            courseId="c1", courseWorkId="cw1", id="s1", updateMask="assignedGrade", body={"assignedGrade": 77})

    def test_patch_grade_http_error(self, classroom_service, http_error):
        submissions_api(classroom_service).patch().execute.side_effect = http_error(400)
        with pytest.raises(APIError, match="Failed to patch grade for submission s1"):
            classroom_service.patch_grade("c1", "cw1", "s1", 77)

    def test_return_submission(self, classroom_service):
        submissions_api(classroom_service).return_().execute.return_value = {}
        assert classroom_service.return_submission("c1", "cw1", "s1") == {}
        submissions_api(classroom_service).return_.assert_called_with(
            courseId="c1", courseWorkId="cw1", id="s1", body={})

    def test_unexpected_error_is_wrapped(self, classroom_service):
        submissions_api(classroom_service).return_().execute.side_effect = TimeoutError("slow")
        with pytest.raises(APIError):
            classroom_service.return_submission("c1", "cw1", "s1")


def gemini_response(text="Grade: 9/10\nFeedback: Nice.", finish_reason=1):
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]), finish_reason=finish_reason, safety_ratings=[])
    return SimpleNamespace(candidates=[candidate], prompt_feedback=None)


@pytest.fixture
def genai():
    with patch("services.gemini_ai.genai") as mocked:
        yield mocked


class TestGeminiClient:
    def test_requires_api_key(self, genai):
        with pytest.raises(ConfigError):
            GeminiClient(api_key=None)
        genai.configure.assert_not_called()

    def test_generate_text(self, genai):
        genai.GenerativeModel.return_value.generate_content.return_value = gemini_response()
        client = GeminiClient(api_key="key", model_name="gemini-test")
        assert client.generate_text("prompt", system_instruction="be strict") == "Grade: 9/10\nFeedback: Nice."
        genai.configure.assert_called_once_with(api_key="key")
        genai.GenerativeModel.assert_called_once_with("gemini-test", system_instruction="be strict")

    def test_no_candidates(self, genai):
        genai.GenerativeModel.return_value.generate_content.return_value = SimpleNamespace(candidates=[], prompt_feedback="blocked")
        with pytest.raises(GradingError):
            GeminiClient(api_key="key").generate_text("prompt")

    def test_safety_block(self, genai):
        genai.types.FinishReason.SAFETY = 3
        genai.GenerativeModel.return_value.generate_content.return_value = gemini_response(finish_reason=3)
        with pytest.raises(GradingError, match="safety"):
            GeminiClient(api_key="key").generate_text("prompt")

    def test_empty_text(self, genai):
        genai.GenerativeModel.return_value.generate_content.return_value = gemini_response(text="  ")
        with pytest.raises(GradingError):
            GeminiClient(api_key="key").generate_text("prompt")

    def test_api_failure(self, genai):
        genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("network down")
        with pytest.raises(GradingError):
            GeminiClient(api_key="key").generate_text("prompt")


class TestServiceFactory:
    def test_gemini_client_is_created_once(self, genai, settings):
        factory = ServiceFactory(settings)
        assert factory.gemini() is factory.gemini()
        genai.configure.assert_called_once_with(api_key="test-key")

    def test_missing_key(self, genai):
        from config import Settings
        with pytest.raises(ConfigError):
            ServiceFactory(Settings(gemini_api_key=None)).gemini()

    def test_concurrent_first_use_builds_one_client(self, settings):
        barrier = threading.Barrier(8)
        results = []

        def slow_client(**kwargs):
            time.sleep(0.05)
            return object()

        factory = ServiceFactory(settings)

        def worker():
            barrier.wait()
            results.append(factory.gemini())

        with patch("services.factory.GeminiClient", side_effect=slow_client) as client_cls:
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        client_cls.assert_called_once()
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_classroom_uses_callers_token(self, settings):
        with patch("services.classroom_api.build_service") as build:
            ServiceFactory(settings).classroom("caller-token")
        credentials = build.call_args.args[2]
        assert credentials.token == "caller-token"
