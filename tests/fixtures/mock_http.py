"""RESPX-based HTTP mocking fixtures for testing.

This module provides reusable fixtures for mocking the catalog, generation
and health endpoints of every supported vendor using RESPX.
"""

import httpx
import pytest
import respx

# === OpenAI Response Fixtures ===


@pytest.fixture
def openai_models_list():
    """OpenAI /models response mixing chat and non-chat models."""
    return {
        "object": "list",
        "data": [
            {"id": "gpt-3.5-turbo", "object": "model", "owned_by": "openai"},
            {"id": "text-embedding-3-small", "object": "model", "owned_by": "system"},
            {"id": "gpt-4o-mini", "object": "model", "owned_by": "system"},
            {"id": "dall-e-3", "object": "model", "owned_by": "system"},
            {"id": "gpt-4o-2024-08-06", "object": "model", "owned_by": "system"},
            {"id": "whisper-1", "object": "model", "owned_by": "openai-internal"},
            {"id": "gpt-4o", "object": "model", "owned_by": "system"},
            {"id": "gpt-4o-2099-01-01", "object": "model", "owned_by": "system"},
            {"id": "gpt-4o-realtime-preview", "object": "model", "owned_by": "system"},
        ],
    }


@pytest.fixture
def openai_chat_completion():
    """Standard OpenAI chat completion response."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "  Hello! How can I help you today?\n",
                },
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 15,
            "total_tokens": 25,
        },
    }


# === Anthropic Response Fixtures ===


@pytest.fixture
def anthropic_models_list():
    """Anthropic /models response."""
    return {
        "data": [
            {"type": "model", "id": "claude-3-haiku-20240307", "display_name": "Claude Haiku 3"},
            {"type": "model", "id": "claude-2.1", "display_name": "Claude 2.1"},
            {"type": "model", "id": "claude-sonnet-4-20250514", "display_name": "Claude Sonnet 4"},
            {"type": "model", "id": "claude-future-20991231", "display_name": "Claude Future"},
            {
                "type": "model",
                "id": "claude-3-5-sonnet-20241022",
                "display_name": "Claude Sonnet 3.5 (New)",
            },
        ],
        "has_more": False,
        "first_id": "claude-3-haiku-20240307",
        "last_id": "claude-3-5-sonnet-20241022",
    }


@pytest.fixture
def anthropic_message_response():
    """Standard Anthropic message response."""
    return {
        "id": "msg_test123",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": "Hello! How can I help you today?"}],
        "model": "claude-sonnet-4-20250514",
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {
            "input_tokens": 10,
            "output_tokens": 15,
        },
    }


# === Google Response Fixtures ===


@pytest.fixture
def google_models_list():
    """Generative Language /models response."""
    return {
        "models": [
            {
                "name": "models/gemini-1.5-flash",
                "displayName": "Gemini 1.5 Flash",
                "inputTokenLimit": 1048576,
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": "models/embedding-001",
                "displayName": "Embedding 001",
                "supportedGenerationMethods": ["embedContent"],
            },
            {
                "name": "models/gemini-1.5-pro-latest",
                "displayName": "Gemini 1.5 Pro Latest",
                "description": "Mid-size multimodal model.",
                "inputTokenLimit": 2097152,
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": "models/gemini-2.0-flash",
                "displayName": "Gemini 2.0 Flash",
                "inputTokenLimit": 1048576,
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": "models/text-bison-001",
                "displayName": "PaLM 2",
                "supportedGenerationMethods": ["generateText"],
            },
        ]
    }


@pytest.fixture
def google_generate_response():
    """Generative Language generateContent response."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [{"text": "Hello! "}, {"text": "How can I help?"}],
                },
                "finishReason": "STOP",
            }
        ]
    }


# === Alibaba Response Fixtures ===


@pytest.fixture
def alibaba_models_list():
    """DashScope compatible-mode /models response."""
    return {
        "object": "list",
        "data": [
            {"id": "qwen-max", "object": "model", "owned_by": "system"},
            {"id": "text-embedding-v1", "object": "model", "owned_by": "system"},
            {"id": "qwen2-72b-instruct", "object": "model", "owned_by": "system"},
            {"id": "qwen-turbo", "object": "model", "owned_by": "system"},
            {"id": "qwen-plus", "object": "model", "owned_by": "system"},
        ],
    }


# === RESPX Mock Fixtures ===


@pytest.fixture
def mock_openai_api():
    """Mock OpenAI API endpoints with RESPX.

    Example:
        def test_list(mock_openai_api, openai_models_list):
            mock_openai_api.get("/v1/models").mock(
                return_value=httpx.Response(200, json=openai_models_list)
            )
    """
    with respx.mock(base_url="https://api.openai.com", assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def mock_anthropic_api():
    """Mock Anthropic API endpoints with RESPX."""
    with respx.mock(base_url="https://api.anthropic.com", assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def mock_google_api():
    """Mock Generative Language API endpoints with RESPX."""
    with respx.mock(
        base_url="https://generativelanguage.googleapis.com", assert_all_called=False
    ) as respx_mock:
        yield respx_mock


@pytest.fixture
def mock_alibaba_api():
    """Mock DashScope compatible-mode endpoints with RESPX."""
    with respx.mock(
        base_url="https://dashscope.aliyuncs.com", assert_all_called=False
    ) as respx_mock:
        yield respx_mock


# === Helper Functions ===


def create_openai_error(status_code: int, error_type: str, message: str) -> httpx.Response:
    """Create an OpenAI-formatted error response."""
    return httpx.Response(
        status_code,
        json={
            "error": {
                "message": message,
                "type": error_type,
                "code": None,
            }
        },
    )


def create_anthropic_error(status_code: int, error_type: str, message: str) -> httpx.Response:
    """Create an Anthropic-formatted error response."""
    return httpx.Response(
        status_code,
        json={
            "type": "error",
            "error": {
                "type": error_type,
                "message": message,
            },
        },
    )
