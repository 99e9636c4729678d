from fastapi import Request, APIRouter

import store
from limiter import limiter
from database import sessionDep
from exceptions import DevDropError, failure
from constants import LIMIT_VALUE_FILES, SCOPE_FILES
from schemas.filesschema import CreateFileSchema, FileReferenceSchema, UploadFileSchema

router_files = APIRouter(prefix="/notes/{note_id}/files", tags=["Files"])


@router_files.get(
    "",
    description="Accepts note id. Returns attached file references keyed by sanitized file key",
    summary="Get note files",
    response_model=dict[str, FileReferenceSchema],
)
@limiter.shared_limit(LIMIT_VALUE_FILES, SCOPE_FILES)
async def get_files(note_id: str, request: Request, session: sessionDep):
    try:
        note = await store.get_note(session, note_id)

        return {file.key: FileReferenceSchema.model_validate(file) for file in note.files}
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Get files]", e)

        return failure("Failed to load files.")


@router_files.post(
    "",
    description="Accepts note id and uploaded file metadata. Attaches the file reference to the note, replacing one with the same key",
    summary="Attach file",
    response_model=FileReferenceSchema,
    status_code=201,
)
@limiter.shared_limit(LIMIT_VALUE_FILES, SCOPE_FILES)
async def attach_file(
    note_id: str,
    createFileSchema: CreateFileSchema,
    request: Request,
    session: sessionDep,
):
    try:
        file = await store.attach_file(session, note_id, createFileSchema)

        return FileReferenceSchema.model_validate(file)
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Attach file]", e)

        return failure("Failed to attach file.")


@router_files.post(
    "/upload",
    description="Accepts note id and file as base64 data URI or remote URL. Uploads it to media storage and attaches it to the note",
    summary="Upload and attach file",
    response_model=FileReferenceSchema,
    status_code=201,
)
@limiter.shared_limit(LIMIT_VALUE_FILES, SCOPE_FILES)
async def upload_file(
    note_id: str,
    uploadFileSchema: UploadFileSchema,
    request: Request,
    session: sessionDep,
):
    try:
        file = await store.upload_file(
            session, note_id, uploadFileSchema.file, uploadFileSchema.name
        )

        return FileReferenceSchema.model_validate(file)
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Upload file]", e)

        return failure("Failed to upload file.")


@router_files.delete(
    "/{key}",
    description="Accepts note id and file key. Deletes the file from media storage, then detaches it from the note",
    summary="Delete file",
)
@limiter.shared_limit(LIMIT_VALUE_FILES, SCOPE_FILES)
async def delete_file(note_id: str, key: str, request: Request, session: sessionDep):
    try:
        await store.detach_file(session, note_id, key)

        return {"success": True}
    except DevDropError:
        raise
    except Exception as e:
        print("Something went wrong [Delete file]", e)

        return failure("Failed to delete file.")
