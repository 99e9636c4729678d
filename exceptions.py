from fastapi.responses import JSONResponse


class DevDropError(Exception):
    """Base error carrying the message shown to the user and the HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NoteNameError(DevDropError):
    status_code = 400


class DuplicateNoteNameError(NoteNameError):
    status_code = 409

    def __init__(self) -> None:
        super().__init__("A code with this name already exists")


class NoteNotFoundError(DevDropError):
    status_code = 404

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Code not found: {note_id}")
        self.note_id = note_id


class FileNotFoundInNoteError(DevDropError):
    status_code = 404

    def __init__(self, note_id: str, key: str) -> None:
        super().__init__(f"File not found: {key}")
        self.note_id = note_id
        self.key = key


class MediaServiceError(DevDropError):
    status_code = 502


def failure(error: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code)
