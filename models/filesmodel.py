from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, BigInteger, ForeignKey
from database import Base


class FilesModel(Base):
    __tablename__ = "files"

    note_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("notes.id", name="fk_files_notes_id", ondelete="CASCADE"),
        primary_key=True,
    )
    key: Mapped[str] = mapped_column(String, primary_key=True)
    public_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    url: Mapped[str] = mapped_column(String, nullable=False)
    resource_type: Mapped[str] = mapped_column(String, nullable=False, default="raw")
    size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    file_format: Mapped[str | None] = mapped_column(String, nullable=True)
    uploaded_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
