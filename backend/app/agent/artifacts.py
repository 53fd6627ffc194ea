from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.canvas import CanvasSection


class CamelModel(BaseModel):
    """Wire models for the editor, which speaks camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComponentRequest(CamelModel):
    component_type: str = ""
    framework: str = ""
    style_preferences: str = ""


class GeneratedComponent(CamelModel):
    """Artifact produced by the Component Agent."""
    code: str
    component_type: str
    framework: str


class BackendFeatures(CamelModel):
    user_auth: bool = False
    crud_ops: bool = False
    file_upload: bool = False
    email_integration: bool = False

    def enabled(self) -> list[str]:
        """Names of the switched-on features, as the editor spells them."""
        return [name for name, value in self.model_dump(by_alias=True).items() if value]


class BackendRequest(CamelModel):
    database: str = ""
    framework: str = ""
    features: BackendFeatures | None = None


class GeneratedBackend(CamelModel):
    """Artifact produced by the Backend Agent: one source file per concern."""
    routes: str
    models: str
    middleware: str
    database: str
    framework: str


class OptimizeRequest(CamelModel):
    code: str = Field(min_length=1)
    type: Literal["component", "backend"] = "component"


class OptimizedCode(CamelModel):
    code: str
    optimized: bool = Field(description="False when the original code was returned unchanged")


class SiteSection(BaseModel):
    component: str = Field(
        description="Palette component id: header, navbar, footer, hero, text, image, button, form or card"
    )
    label: str | None = Field(default=None, description="Short label shown on the canvas node")
    props: dict[str, Any] = Field(
        default_factory=dict,
        description="Content for the section, e.g. heading, body, image_alt, button_text",
    )

    def to_canvas_section(self) -> CanvasSection:
        return CanvasSection(component=self.component, label=self.label, props=self.props)


class GeneratedSite(BaseModel):
    """Artifact produced by the Site Agent."""
    title: str = Field(min_length=1, max_length=255, description="Short name of the website")
    description: str = Field(default="", description="One or two sentences describing the website")
    sections: list[SiteSection] = Field(
        default_factory=list, description="Page sections from top to bottom"
    )
    html: str = Field(
        default="",
        description="Complete single-file HTML document for the site using Tailwind CSS from the CDN",
    )
