from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import CurrentUser
from app.canvas import CATEGORIES, PaletteItem, search_components

router = APIRouter(prefix="/components", tags=["components"])


class ComponentPalette(BaseModel):
    categories: list[str]
    data: list[PaletteItem]
    count: int


@router.get("/", response_model=ComponentPalette)
def read_components(current_user: CurrentUser, search: str | None = None) -> ComponentPalette:
    """
    Prefabricated components available to the canvas, optionally filtered by name or category.
    """
    items = search_components(search)
    return ComponentPalette(categories=CATEGORIES, data=items, count=len(items))
