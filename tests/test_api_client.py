"""Tests for the frontend's API client."""

from unittest.mock import MagicMock

import pytest
import requests

from resume_screener.frontend.api_client import ApiError, PipelineClient


def make_response(status_code=200, payload=None, content=b"{}"):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.json.return_value = payload if payload is not None else {}
    response.text = str(payload)
    return response


@pytest.fixture
def mock_request(mocker):
    return mocker.patch("resume_screener.frontend.api_client.requests.request")


def test_get_pipeline_ranked(mock_request):
    mock_request.return_value = make_response(payload={"entries": []})
    client = PipelineClient("http://backend:8000/")

    assert client.get_pipeline(ranked=True) == {"entries": []}
    mock_request.assert_called_once_with(
        "GET", "http://backend:8000/pipeline", timeout=30, params={"ranked": "true"}
    )


def test_upload_builds_multipart(mock_request):
    mock_request.return_value = make_response(payload=[{"id": "1"}])
    client = PipelineClient("http://backend")

    client.upload_resumes([("a.pdf", b"data", "application/pdf")])

    kwargs = mock_request.call_args.kwargs
    assert kwargs["files"] == [("files", ("a.pdf", b"data", "application/pdf"))]


def test_upload_nothing_skips_request(mock_request):
    assert PipelineClient().upload_resumes([]) == []
    mock_request.assert_not_called()


def test_error_detail_is_raised(mock_request):
    mock_request.return_value = make_response(400, {"detail": "Please enter a job description first."})

    with pytest.raises(ApiError) as exc:
        PipelineClient().start_analysis()

    assert exc.value.status_code == 400
    assert "job description" in str(exc.value)


def test_delete_returns_none_on_204(mock_request):
    mock_request.return_value = make_response(204, content=b"")
    assert PipelineClient().remove_resume("abc") is None


def test_connection_error(mock_request):
    mock_request.side_effect = requests.exceptions.ConnectionError()
    client = PipelineClient("http://nowhere")

    with pytest.raises(ApiError, match="Cannot connect"):
        client.get_stats()
    assert client.is_live() is False


def test_send_chat(mock_request):
    mock_request.return_value = make_response(payload={"reply": {"text": "ok"}})

    PipelineClient("http://backend").send_chat("e1", "Hi")

    args, kwargs = mock_request.call_args
    assert args == ("POST", "http://backend/resumes/e1/chat")
    assert kwargs["json"] == {"message": "Hi"}
