from unittest.mock import patch

import pytest

from app.agent.artifacts import ComponentRequest, GeneratedComponent
from app.agent.component_agent import EMPTY_COMPONENT_PLACEHOLDER, ComponentAgent
from app.tests.utils.llm import mock_openai_client


@pytest.mark.asyncio
async def test_component_agent():
    mock_client_instance, mock_completions = mock_openai_client(
        "```tsx\nexport default function PricingCard() { return <div data-testid=\"card\" />; }\n```"
    )

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        agent = ComponentAgent()
        component = await agent.run(
            ComponentRequest(
                component_type="pricing card",
                framework="React",
                style_preferences="minimal, dark mode",
            )
        )

    assert isinstance(component, GeneratedComponent)
    assert component.code.startswith("export default function PricingCard()")
    assert component.component_type == "pricing card"
    assert component.framework == "React"

    user_prompt = mock_completions.create.call_args.kwargs["messages"][1]["content"]
    assert "pricing card" in user_prompt
    assert "React" in user_prompt
    assert "minimal, dark mode" in user_prompt


@pytest.mark.asyncio
async def test_component_agent_uses_placeholder_for_empty_output():
    mock_client_instance, _ = mock_openai_client("", "   ")

    with patch("app.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        component = await ComponentAgent().run(
            ComponentRequest(component_type="navbar", framework="React", style_preferences="bold")
        )

    assert component.code == EMPTY_COMPONENT_PLACEHOLDER


def test_component_request_accepts_camel_case():
    request = ComponentRequest.model_validate(
        {"componentType": "hero", "framework": "Vue", "stylePreferences": "playful"}
    )

    assert request.component_type == "hero"
    assert request.style_preferences == "playful"
