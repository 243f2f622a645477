"""Field catalog endpoints."""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from routepilot.api.schemas.responses import CategoryPathsResponse, ErrorResponse
from routepilot.catalog import get_field_catalog
from routepilot.models import RuleCategory

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("")
async def get_catalog() -> list[dict[str, Any]]:
    """The full field catalog, every group and category."""
    return get_field_catalog().to_list()


@router.get("/prompt", response_class=PlainTextResponse)
async def get_catalog_prompt() -> str:
    """The full catalog as formatted text, for embedding into prompts."""
    return get_field_catalog().serialize()


@router.get(
    "/{category}/paths",
    response_model=CategoryPathsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_category_paths(category: str):
    """Sorted list of paths a rule of this category may reference."""
    cat = RuleCategory.coerce(category)
    return CategoryPathsResponse(
        category=cat.value,
        result_type=cat.result_type,
        paths=sorted(get_field_catalog().paths_for(cat)),
    )
