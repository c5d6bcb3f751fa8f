"""Note endpoints: save, list, fetch with backlinks, delete."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from mdtree.api.dependencies import get_clock, get_note_store
from mdtree.converter.document import Clock, convert_markdown, serialize_document
from mdtree.converter.metadata import merge_unique
from mdtree.models import (
    NoteCreate,
    NoteDetailResponse,
    NoteListResponse,
    NoteSaveRequest,
    NoteSaveResponse,
)
from mdtree.stores.notes import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["notes"])


@router.post("/notes", response_model=NoteSaveResponse)
async def save_note(
    request: NoteSaveRequest,
    store: Annotated[NoteStore, Depends(get_note_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> dict[str, Any]:
    """Create a note, or update it when the request carries an id.

    Request tags are merged with the tags found in the markdown.
    """
    result = convert_markdown(request.markdown, clock=clock)
    metadata = result.metadata
    tags = merge_unique(metadata.tags, request.tags or [])

    data = NoteCreate(
        title=request.title,
        markdown_content=request.markdown,
        json_output=serialize_document(result.document, indent=None),
        tags=",".join(tags) or None,
        wikilinks=",".join(metadata.wikilinks),
        word_count=metadata.word_count,
        reading_time=metadata.reading_time,
        created_at=metadata.created_at,
        updated_at=metadata.updated_at,
    )

    if request.id is not None:
        note = store.update(request.id, data)
        if note is None:
            raise HTTPException(status_code=404, detail=f"Note {request.id} not found")
        logger.info("Updated note %d (%s)", note.id, note.title)
    else:
        note = store.create(data)

    return {**result.to_dict(), "note": note}


@router.get("/notes", response_model=NoteListResponse)
async def list_notes(
    store: Annotated[NoteStore, Depends(get_note_store)],
) -> NoteListResponse:
    """List all notes, most recently updated first."""
    return NoteListResponse(notes=store.list_all())


@router.get("/notes/{note_id}", response_model=NoteDetailResponse)
async def get_note(
    note_id: int,
    store: Annotated[NoteStore, Depends(get_note_store)],
) -> NoteDetailResponse:
    """Get a note and the other notes that link to it."""
    note = store.get(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")

    backlinks = [b for b in store.backlinks(note.title) if b.id != note.id]
    return NoteDetailResponse(note=note, backlinks=backlinks)


@router.delete("/notes/{note_id}")
async def delete_note(
    note_id: int,
    store: Annotated[NoteStore, Depends(get_note_store)],
) -> dict[str, bool]:
    """Delete a note."""
    if not store.delete(note_id):
        raise HTTPException(status_code=404, detail="Note not found")
    logger.info("Deleted note %d", note_id)
    return {"success": True}
