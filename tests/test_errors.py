#tests\test_errors.py

"""Test error taxonomy."""

import docker
import pytest
import requests

from pomegranate.core.errors import (
    ApplicationCannotStart,
    ApplicationCannotStop,
    EngineErrorKind,
    StatusClass,
    status_code_for,
)


class TestStatusCode:

    def test_not_found(self):
        assert status_code_for(docker.errors.NotFound("No such container")) == 404
        assert status_code_for(docker.errors.ImageNotFound("No such image")) == 404

    def test_api_error_uses_response_status(self, make_api_error):
        assert status_code_for(make_api_error(409)) == 409
        assert status_code_for(make_api_error(500)) == 500

    def test_connection_error_is_unavailable(self):
        assert status_code_for(requests.exceptions.ConnectionError("refused")) == 503

    def test_uncategorized_is_internal(self):
        assert status_code_for(RuntimeError("boom")) == 500
        assert status_code_for(docker.errors.APIError("no response")) == 500


class TestStatusClass:

    @pytest.mark.parametrize("code,expected", [
        (404, StatusClass.NOT_FOUND),
        (400, StatusClass.INVALID_ARGUMENT),
        (409, StatusClass.CONFLICT),
        (403, StatusClass.PERMISSION_DENIED),
        (401, StatusClass.UNAUTHENTICATED),
        (503, StatusClass.UNAVAILABLE),
        (500, StatusClass.INTERNAL),
        (418, StatusClass.INTERNAL),
    ])
    def test_from_code(self, code, expected):
        assert StatusClass.from_code(code) == expected

    def test_http_status(self):
        assert StatusClass.CONFLICT.http_status == 409
        assert StatusClass.INTERNAL.http_status == 500


class TestEngineError:

    def test_wrap_keeps_cause_and_code(self):
        """Test wrapped error carries operation, name, cause and status."""
        cause = docker.errors.NotFound("No such container")

        error = ApplicationCannotStop.wrap("stop the container", "webapp", cause)

        assert error.kind == EngineErrorKind.CANNOT_STOP
        assert error.cause is cause
        assert error.code == 404
        assert error.status_class == StatusClass.NOT_FOUND
        assert "stop the container" in str(error)
        assert "webapp" in str(error)
        assert "No such container" in str(error)

    def test_wrap_message_format(self):
        cause = docker.errors.NotFound("No such container")

        error = ApplicationCannotStop.wrap("stop the container", "webapp", cause)

        assert str(error) == "Failed to stop the container for application webapp: No such container"

    def test_explicit_code(self):
        error = ApplicationCannotStart("Failed", code=409)
        assert error.status_class == StatusClass.CONFLICT

    def test_no_cause_is_internal(self):
        assert ApplicationCannotStart("Failed").status_class == StatusClass.INTERNAL
