from fastapi import Request, APIRouter

import store
from limiter import limiter
from database import sessionDep
from exceptions import DevDropError, failure
from constants import LIMIT_VALUE_NOTES, SCOPE_NOTES
from schemas.notesschema import (
    NoteSchema,
    NoteNameSchema,
    NoteContentSchema,
    NotesListSchema,
)

router_notes = APIRouter(prefix="/notes", tags=["Notes"])


@router_notes.get(
    "",
    description="Accepts optional search term. Returns total count of notes and the notes whose name contains the term, most recently modified first",
    summary="Get notes",
    response_model=NotesListSchema,
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def get_notes(request: Request, session: sessionDep, search: str | None = None):
    try:
        notes = await store.list_notes(session)

        return {"count": len(notes), "notes": store.filter_notes(notes, search)}
    except Exception as e:
        print("Something went wrong [Get notes]", e)

        return failure("Failed to load codes. Please try again.")


@router_notes.post(
    "",
    description="Accepts note name. Returns created note if name is not empty, at most 100 characters and not taken (case-insensitive)",
    summary="Create new note",
    response_model=NoteSchema,
    status_code=201,
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def create_new_note(
    noteNameSchema: NoteNameSchema, request: Request, session: sessionDep
):
    try:
        note = await store.create_note(session, noteNameSchema.name)

        return NoteSchema.from_model(note)
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Create new note]", e)

        return failure("Failed to create code.")


@router_notes.get(
    "/{note_id}",
    description="Accepts note id. Returns note with content and attached files",
    summary="Get note",
    response_model=NoteSchema,
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def get_note(note_id: str, request: Request, session: sessionDep):
    try:
        note = await store.get_note(session, note_id)

        return NoteSchema.from_model(note)
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Get note]", e)

        return failure("Failed to load code.")


@router_notes.put(
    "/{note_id}/name",
    description="Accepts note id and new name. Returns renamed note if name is valid and not taken by another note",
    summary="Rename note",
    response_model=NoteSchema,
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def rename_note(
    note_id: str, noteNameSchema: NoteNameSchema, request: Request, session: sessionDep
):
    try:
        note = await store.rename_note(session, note_id, noteNameSchema.name)

        return NoteSchema.from_model(note)
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Rename note]", e)

        return failure("Failed to rename code.")


@router_notes.put(
    "/{note_id}/content",
    description="Accepts note id and full content. Overwrites stored content, last write wins",
    summary="Save note content",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def save_note_content(
    note_id: str,
    noteContentSchema: NoteContentSchema,
    request: Request,
    session: sessionDep,
):
    try:
        await store.update_content(session, note_id, noteContentSchema.content)

        return {"success": True}
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Save note content]", e)

        return failure("Failed to save code.")


@router_notes.delete(
    "/{note_id}",
    description="Accepts note id. Deletes attached files from media storage, then the note itself",
    summary="Delete note",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def delete_note(note_id: str, request: Request, session: sessionDep):
    try:
        await store.delete_note(session, note_id)

        return {"success": True}
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Delete note]", e)

        return failure("Failed to delete code.")
