"""Reads and writes of notes and their file references.

Every write commits, invalidates the cached note list and publishes fresh
snapshots to realtime subscribers of ``notes`` and ``notes/{id}``.
"""

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from constants import (
    NOTE_NAME_MAX_LENGTH,
    CACHE_KEY_NOTES,
    CACHE_KEY_NOTES_GENERATION,
    CACHE_EXPIRE_NOTES,
)
from database import rd
from exceptions import (
    NoteNameError,
    DuplicateNoteNameError,
    NoteNotFoundError,
    FileNotFoundInNoteError,
    MediaServiceError,
)
from identifiers import current_millis, sanitize_key
from media import media_storage
from models.filesmodel import FilesModel
from models.notesmodel import NotesModel
from realtime import hub, NOTES_PATH, note_path
from schemas.filesschema import CreateFileSchema
from schemas.notesschema import NoteSchema, NoteSummarySchema


async def validate_note_name(
    session: AsyncSession,
    name: str,
    empty_message: str,
    exclude_id: str | None = None,
) -> str:
    trimmed_name = name.strip()
    if not trimmed_name:
        raise NoteNameError(empty_message)
    if len(trimmed_name) > NOTE_NAME_MAX_LENGTH:
        raise NoteNameError("Code name too long")

    query = select(NotesModel.id).where(NotesModel.name_key == trimmed_name.lower())
    if exclude_id is not None:
        query = query.where(NotesModel.id != exclude_id)
    result = await session.execute(query)
    if result.first() is not None:
        raise DuplicateNoteNameError()

    return trimmed_name


async def get_note(session: AsyncSession, note_id: str) -> NotesModel:
    note = await session.get(NotesModel, note_id, populate_existing=True)
    if note is None:
        raise NoteNotFoundError(note_id)
    return note


async def list_notes(session: AsyncSession) -> list[dict]:
    """Return note summaries, most recently modified first."""
    # a write bumps the generation, so a list read before it is never served
    generation = await rd.get_counter(CACHE_KEY_NOTES_GENERATION)
    cache_key = f"{CACHE_KEY_NOTES}:{generation}"
    cached = await rd.get_cache(cache_key)
    if cached is not None:
        return cached

    query = select(
        NotesModel.id, NotesModel.name, NotesModel.created_at, NotesModel.last_modified
    ).order_by(NotesModel.last_modified.desc())
    result = await session.execute(query)
    notes = [
        NoteSummarySchema.model_validate(row).model_dump(by_alias=True)
        for row in result.all()
    ]

    await rd.set_cache(cache_key, notes, CACHE_EXPIRE_NOTES)
    return notes


def filter_notes(notes: list[dict], search: str | None) -> list[dict]:
    if not search:
        return notes
    needle = search.lower()
    return [note for note in notes if needle in note["name"].lower()]


async def publish_changes(
    session: AsyncSession, note_id: str, note: NotesModel | None
) -> None:
    await rd.increment(CACHE_KEY_NOTES_GENERATION)
    snapshot = NoteSchema.from_model(note).model_dump(by_alias=True) if note else None
    hub.publish(note_path(note_id), snapshot)
    if hub.subscriber_count(NOTES_PATH):
        hub.publish(NOTES_PATH, await list_notes(session))


async def create_note(session: AsyncSession, name: str) -> NotesModel:
    trimmed_name = await validate_note_name(session, name, "Please enter a code name")

    now = current_millis()
    note = NotesModel(
        name=trimmed_name,
        name_key=trimmed_name.lower(),
        content="",
        created_at=now,
        last_modified=now,
        files=[],
    )
    session.add(note)
    await session.commit()

    await publish_changes(session, note.id, note)
    return note


async def rename_note(session: AsyncSession, note_id: str, name: str) -> NotesModel:
    note = await get_note(session, note_id)
    trimmed_name = await validate_note_name(
        session, name, "Code name cannot be empty", exclude_id=note_id
    )

    note.name = trimmed_name
    note.name_key = trimmed_name.lower()
    note.last_modified = current_millis()
    await session.commit()

    await publish_changes(session, note_id, note)
    return note


async def update_content(session: AsyncSession, note_id: str, content: str) -> NotesModel:
    note = await get_note(session, note_id)
    note.content = content
    await session.commit()

    await publish_changes(session, note_id, note)
    return note


async def delete_media(files: list[FilesModel]) -> list[dict]:
    public_ids_by_type: dict[str, list[str]] = defaultdict(list)
    for file in files:
        public_ids_by_type[file.resource_type].append(file.public_id)

    results = []
    try:
        for resource_type, public_ids in public_ids_by_type.items():
            results.extend(
                await media_storage.bulk_delete(public_ids, resource_type=resource_type)
            )
    except Exception as e:
        print("Something went wrong [Delete media]", e)
        raise MediaServiceError("Failed to delete attached files.") from e
    return results


async def delete_note(session: AsyncSession, note_id: str) -> None:
    note = await get_note(session, note_id)
    if note.files:
        await delete_media(note.files)

    await session.delete(note)
    await session.commit()

    await publish_changes(session, note_id, None)


async def attach_file(
    session: AsyncSession, note_id: str, reference: CreateFileSchema
) -> FilesModel:
    note = await get_note(session, note_id)
    key = sanitize_key(reference.public_id)

    file = next((f for f in note.files if f.key == key), None)
    if file is None:
        file = FilesModel(note_id=note_id, key=key)
        note.files.append(file)
    file.public_id = reference.public_id
    file.name = reference.name
    file.url = reference.url
    file.resource_type = reference.resource_type
    file.size = reference.size
    file.file_format = reference.file_format
    file.uploaded_at = current_millis()
    await session.commit()

    await publish_changes(session, note_id, note)
    return file


async def upload_file(
    session: AsyncSession, note_id: str, file: str, name: str | None = None
) -> FilesModel:
    await get_note(session, note_id)
    try:
        result = await media_storage.upload(file)
    except Exception as e:
        print("Something went wrong [Upload file]", e)
        raise MediaServiceError("Failed to upload file.") from e

    reference = CreateFileSchema(
        public_id=result["public_id"],
        name=name or result.get("original_filename") or result["public_id"],
        url=result["secure_url"],
        resource_type=result.get("resource_type", "raw"),
        size=result.get("bytes", 0),
        file_format=result.get("format"),
    )
    return await attach_file(session, note_id, reference)


async def detach_file(session: AsyncSession, note_id: str, key: str) -> None:
    note = await get_note(session, note_id)
    file = next((f for f in note.files if f.key == key), None)
    if file is None:
        raise FileNotFoundInNoteError(note_id, key)

    try:
        await media_storage.destroy(file.public_id, resource_type=file.resource_type)
    except Exception as e:
        print("Something went wrong [Destroy file]", e)
        raise MediaServiceError("Failed to delete file.") from e

    note.files.remove(file)
    await session.commit()

    await publish_changes(session, note_id, note)
