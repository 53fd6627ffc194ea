import asyncio
from unittest.mock import patch

import httpx
import pytest
from openai import APIConnectionError

from app.agent.artifacts import BackendFeatures, BackendRequest, GeneratedBackend
from app.agent.backend_agent import BackendAgent
from app.tests.utils.llm import mock_openai_client


def _responder(system_prompt: str, user_prompt: str) -> str:
    if "routes file" in user_prompt:
        return "// routes"
    if "models/schema file" in user_prompt:
        return "// models"
    if "middleware file" in user_prompt:
        return ""
    raise AssertionError(f"unexpected prompt: {user_prompt}")


@pytest.mark.asyncio
async def test_backend_agent_generates_three_files():
    mock_client_instance, mock_completions = mock_openai_client(responder=_responder)

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        backend = await BackendAgent().run(
            BackendRequest(
                database="PostgreSQL",
                framework="Express",
                features=BackendFeatures(user_auth=True, file_upload=True),
            )
        )

    assert isinstance(backend, GeneratedBackend)
    assert backend.routes == "// routes"
    assert backend.models == "// models"
    # empty middleware reply is retried once, then replaced by a placeholder
    assert backend.middleware == "// Error generating middleware"
    assert backend.database == "PostgreSQL"
    assert backend.framework == "Express"
    assert mock_completions.create.call_count == 4

    prompts = [call.kwargs["messages"][1]["content"] for call in mock_completions.create.call_args_list]
    assert all("userAuth, fileUpload" in prompt for prompt in prompts)


def test_backend_features_enabled_uses_editor_names():
    features = BackendFeatures.model_validate(
        {"userAuth": True, "crudOps": True, "fileUpload": False, "emailIntegration": True}
    )

    assert features.enabled() == ["userAuth", "crudOps", "emailIntegration"]
    assert BackendFeatures().enabled() == []


@pytest.mark.asyncio
async def test_backend_agent_cancels_pending_files_on_provider_failure():
    cancelled: list[str] = []

    async def _create(**kwargs):
        user_prompt = kwargs["messages"][1]["content"]
        if "routes file" in user_prompt:
            raise APIConnectionError(
                request=httpx.Request("POST", "https://example.invalid/chat/completions")
            )
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.append(user_prompt.split(" file")[0])
            raise

    mock_client_instance, mock_completions = mock_openai_client()
    mock_completions.create.side_effect = _create

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with pytest.raises(APIConnectionError):
            await BackendAgent().run(BackendRequest(database="MongoDB", framework="Express"))

    assert len(cancelled) == 2
