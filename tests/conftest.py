"""
Shared test fixtures for the relay.
Google API resources and the Gemini client are replaced with mocks;
no test touches the network.
"""
import json
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

import config
from web.app import create_app


def make_http_error(status, payload=None):
    """Build a googleapiclient HttpError carrying a JSON error body."""
    payload = payload if payload is not None else {"error": {"code": status, "message": "boom"}}
    return HttpError(httplib2.Response({"status": status}), json.dumps(payload).encode("utf-8"))


@pytest.fixture
def http_error():
    return make_http_error


@pytest.fixture
def settings():
    return config.Settings(gemini_api_key="test-key", cors_origins="*")


@pytest.fixture
def classroom():
    """A ClassroomService stand-in with no submissions and no materials."""
    service = MagicMock()
    service.get_course_work.return_value = {"id": "cw1", "materials": []}
    service.list_submissions.return_value = []
    service.get_student_profile.return_value = {"name": {"fullName": "Ada Lovelace"}}
    service.patch_grade.return_value = {}
    service.return_submission.return_value = {}
    return service


@pytest.fixture
def drive():
    service = MagicMock()
    service.export_text.return_value = "document text"
    return service


@pytest.fixture
def gemini():
    client = MagicMock()
    client.generate_text.return_value = "Grade: 8/10\nFeedback: Solid work."
    return client


@pytest.fixture
def service_factory(classroom, drive, gemini):
    factory = MagicMock()
    factory.classroom.return_value = classroom
    factory.drive.return_value = drive
    factory.gemini.return_value = gemini
    return factory


@pytest.fixture
def client(settings, service_factory):
    app = create_app(settings, service_factory=service_factory)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def auth_header():
    return {"Authorization": "Bearer test-token"}
