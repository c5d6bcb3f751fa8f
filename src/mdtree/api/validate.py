"""Pre-flight validation endpoint."""

from fastapi import APIRouter

from mdtree.lint import markdown_stats, validate_markdown
from mdtree.models import ConvertRequest, ValidateResponse

router = APIRouter(prefix="/api", tags=["validate"])


@router.post("/validate", response_model=ValidateResponse)
async def validate(request: ConvertRequest) -> ValidateResponse:
    """Lint markdown and report editor statistics without converting it."""
    return ValidateResponse(
        report=validate_markdown(request.markdown),
        stats=markdown_stats(request.markdown),
    )
