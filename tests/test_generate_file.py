import logging

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from coder_chat.dependencies import get_completion_client
from coder_chat.main import create_app
from coder_chat.services.proxy_service import GENERATE_FILE_SYSTEM_PROMPT
from fakes import FakeCompletionClient, completion_with


def _client(settings, fake: FakeCompletionClient) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[get_completion_client] = lambda: fake
    return TestClient(app)


def test_generate_file_happy_path(settings):
    fake = FakeCompletionClient(completion_with("print('hi')"))
    client = _client(settings, fake)

    r = client.post(
        "/api/generate-file",
        json={"filename": "hello.py", "prompt": "Write a python script that prints hi"},
    )

    assert r.status_code == 200
    assert r.json() == {"filename": "hello.py", "content": "print('hi')"}


def test_generate_file_sends_fixed_conversation(settings):
    fake = FakeCompletionClient(completion_with("x"))
    client = _client(settings, fake)

    client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "say x"})

    assert fake.calls == [
        {
            "model": "gpt-4",
            "messages": [
                {"role": "system", "content": GENERATE_FILE_SYSTEM_PROMPT},
                {"role": "user", "content": "say x"},
            ],
            "max_tokens": 1500,
            "temperature": 0.15,
        }
    ]


def test_generate_file_without_choices_returns_empty_content(settings):
    client = _client(settings, FakeCompletionClient({"choices": []}))

    r = client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "p"})

    assert r.status_code == 200
    assert r.json() == {"filename": "a.txt", "content": ""}


@pytest.mark.parametrize(
    "body",
    [
        {"prompt": "p"},
        {"filename": "a.txt"},
        {"filename": "", "prompt": "p"},
        {"filename": "a.txt", "prompt": None},
        {},
    ],
)
def test_generate_file_requires_filename_and_prompt(settings, body):
    fake = FakeCompletionClient(completion_with("x"))
    client = _client(settings, fake)

    r = client.post("/api/generate-file", json=body)

    assert r.status_code == 400
    assert r.json() == {"error": "filename and prompt required"}
    assert fake.calls == []


def test_generate_file_upstream_failure_returns_500(settings):
    fake = FakeCompletionClient(error=ConnectionError("connection reset"))
    client = _client(settings, fake)

    r = client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "p"})

    assert r.status_code == 500
    assert r.json() == {"error": "generate-file failed", "details": "connection reset"}


def test_generate_file_error_without_message_uses_exception_name(settings):
    fake = FakeCompletionClient(error=TimeoutError())
    client = _client(settings, fake)

    r = client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "p"})

    assert r.status_code == 500
    assert r.json()["details"] == "TimeoutError"


def test_generate_file_null_first_choice_returns_empty_content(settings):
    client = _client(settings, FakeCompletionClient({"choices": [None]}))

    r = client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "p"})

    assert r.status_code == 200
    assert r.json() == {"filename": "a.txt", "content": ""}


def test_generate_file_openai_error_surfaces_message_and_logs_body(settings, caplog):
    caplog.set_level(logging.ERROR, logger="coder_chat.services.proxy_service")
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    body = {"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}}
    error = openai.AuthenticationError(
        "Incorrect API key provided",
        response=httpx.Response(401, request=request),
        body=body,
    )
    client = _client(settings, FakeCompletionClient(error=error))

    r = client.post("/api/generate-file", json={"filename": "a.txt", "prompt": "p"})

    assert r.status_code == 500
    assert r.json() == {
        "error": "generate-file failed",
        "details": "Incorrect API key provided",
    }
    assert "invalid_api_key" in caplog.text
    assert "invalid_api_key" not in r.text
