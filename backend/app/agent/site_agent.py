import logging

from app.agent.artifacts import GeneratedSite, SiteSection
from app.agent.base import BaseAgent
from app.agent.prompts.site import SITE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

SITE_TITLE_MAX_CHARS = 80

DEFAULT_SECTIONS = ("header", "hero", "footer")


def derive_title_from_prompt(prompt: str) -> str:
    cleaned = " ".join((prompt or "").split())
    return cleaned[:SITE_TITLE_MAX_CHARS].strip() or "Untitled Website"


def default_sections() -> list[SiteSection]:
    return [SiteSection(component=component) for component in DEFAULT_SECTIONS]


class SiteAgent(BaseAgent[str, GeneratedSite]):
    """
    Agent that turns a natural-language description into a whole site: a title,
    ordered canvas sections and a single-file HTML page.

    Parsing is best-effort. An unparseable reply still yields a usable site built
    from the prompt and a default header/hero/footer layout.
    """

    async def run(self, input_data: str) -> GeneratedSite:
        try:
            site = await self.llm.generate_structured(
                system_prompt=SITE_SYSTEM_PROMPT,
                user_prompt=input_data,
                response_schema=GeneratedSite,
            )
        except ValueError as exc:
            logger.warning("Site generation reply unusable, falling back to default layout: %s", exc)
            return GeneratedSite(
                title=derive_title_from_prompt(input_data),
                description=input_data.strip(),
                sections=default_sections(),
            )

        site.title = site.title.strip() or derive_title_from_prompt(input_data)
        if not site.sections:
            site.sections = default_sections()
        return site
