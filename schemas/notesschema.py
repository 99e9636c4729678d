from pydantic import BaseModel

from schemas.baseschema import CamelSchema
from schemas.filesschema import FileReferenceSchema


class NoteNameSchema(BaseModel):
    name: str


class NoteContentSchema(BaseModel):
    content: str


class NoteSummarySchema(CamelSchema):
    id: str
    name: str
    created_at: int
    last_modified: int


class NoteSchema(NoteSummarySchema):
    content: str
    files: dict[str, FileReferenceSchema] = {}

    @classmethod
    def from_model(cls, note) -> "NoteSchema":
        return cls(
            id=note.id,
            name=note.name,
            content=note.content,
            created_at=note.created_at,
            last_modified=note.last_modified,
            files={
                file.key: FileReferenceSchema.model_validate(file) for file in note.files
            },
        )


class NotesListSchema(BaseModel):
    count: int
    notes: list[NoteSummarySchema]
