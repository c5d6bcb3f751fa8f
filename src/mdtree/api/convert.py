"""Conversion endpoints: convert text, upload a file, and browse history."""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile

from mdtree.api.dependencies import get_clock, get_conversion_store, get_settings
from mdtree.api.uploads import check_file_size, check_file_type, decode_upload
from mdtree.config import Settings
from mdtree.converter.document import Clock, convert_markdown, serialize_document
from mdtree.models import Conversion, ConversionResult, ConvertRequest, ConvertResponse, UploadResponse
from mdtree.stores.conversions import ConversionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["convert"])


def _convert_and_store(
    markdown: str, store: ConversionStore, clock: Clock, filename: str | None = None
) -> ConversionResult:
    result = convert_markdown(markdown, clock=clock, filename=filename)
    store.add(markdown, serialize_document(result.document, indent=None))
    return result


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    request: ConvertRequest,
    store: Annotated[ConversionStore, Depends(get_conversion_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> dict[str, Any]:
    """Convert markdown text into a structured document."""
    result = _convert_and_store(request.markdown, store, clock)
    logger.info(
        "Converted %d chars: %d elements in %s",
        len(request.markdown),
        result.stats.elements,
        result.stats.process_time,
    )
    return result.to_dict()


@router.post("/upload", response_model=UploadResponse)
async def upload(
    file: Annotated[UploadFile, File()],
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[ConversionStore, Depends(get_conversion_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> dict[str, Any]:
    """Convert an uploaded .md/.markdown/.txt file.

    Rejected uploads raise UploadError, mapped to a 4xx response by the app.
    """
    check_file_type(file.filename, file.content_type, settings)
    data = await file.read(settings.max_upload_bytes + 1)
    check_file_size(len(data), settings)

    markdown = decode_upload(data)
    result = _convert_and_store(markdown, store, clock, filename=file.filename)
    logger.info("Converted upload %s (%d bytes)", file.filename, len(data))
    return {**result.to_dict(), "markdown": markdown}


@router.get("/conversions", response_model=list[Conversion])
async def recent_conversions(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[ConversionStore, Depends(get_conversion_store)],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> list[Conversion]:
    """List the most recent conversions."""
    return store.recent(limit or settings.recent_conversions_limit)


@router.get("/conversions/{conversion_id}/download")
async def download_conversion(
    conversion_id: int,
    store: Annotated[ConversionStore, Depends(get_conversion_store)],
) -> Response:
    """Download a stored conversion's JSON output as a file."""
    conversion = store.get(conversion_id)
    if conversion is None:
        raise HTTPException(status_code=404, detail=f"Conversion {conversion_id} not found")

    body = json.dumps(json.loads(conversion.json_output), indent=2, ensure_ascii=False)
    return Response(
        content=body,
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="conversion-{conversion_id}.json"'
        },
    )
