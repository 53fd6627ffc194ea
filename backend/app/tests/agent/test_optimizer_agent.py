from unittest.mock import patch

import httpx
import pytest
from openai import APIConnectionError

from app.agent.artifacts import OptimizeRequest
from app.agent.optimizer_agent import OptimizerAgent
from app.tests.utils.llm import mock_openai_client


@pytest.mark.asyncio
async def test_optimizer_agent_returns_optimized_code():
    mock_client_instance, mock_completions = mock_openai_client("const total = items.length;")

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("app.agent.optimizer_agent.settings.MODEL_OPTIMIZER", "gemini-pro-test"):
            agent = OptimizerAgent()
            result = await agent.run(
                OptimizeRequest(code="var total = 0; for (i in items) total++;", type="component")
            )

    assert result.optimized is True
    assert result.code == "const total = items.length;"
    assert agent.llm.model_name == "gemini-pro-test"
    user_prompt = mock_completions.create.call_args.kwargs["messages"][1]["content"]
    assert "component code" in user_prompt


@pytest.mark.asyncio
async def test_optimizer_agent_returns_original_code_on_provider_error():
    mock_client_instance, mock_completions = mock_openai_client()
    mock_completions.create.side_effect = APIConnectionError(
        request=httpx.Request("POST", "https://example.invalid/chat/completions")
    )
    original = "function add(a, b) { return a + b }"

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        result = await OptimizerAgent().run(OptimizeRequest(code=original, type="backend"))

    assert result.optimized is False
    assert result.code == original
