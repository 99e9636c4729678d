from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, BigInteger
from database import Base
from identifiers import generate_push_id
from models.filesmodel import FilesModel


class NotesModel(Base):
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(20), primary_key=True, default=lambda: generate_push_id()
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # name.lower(); the database lower() only folds ASCII letters
    name_key: Mapped[str] = mapped_column(String, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    last_modified: Mapped[int] = mapped_column(BigInteger, nullable=False)

    files: Mapped[list[FilesModel]] = relationship(
        cascade="all, delete-orphan", lazy="selectin", order_by=FilesModel.uploaded_at
    )
