from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, UUID
from sqlalchemy.orm import relationship

from cvdash.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    storage_key = Column(String(512), nullable=False, default="")
    mime_type = Column(String(128), nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    raw_text = Column(Text, default="")
    # JSON с разобранными секциями CV
    structured = Column(Text, default="{}")

    # Relationships
    owner = relationship("User", back_populates="documents")
    versions = relationship(
        "DocumentVersion",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by=lambda: DocumentVersion.created_at.desc(),
    )


class DocumentVersion(BaseModel):
    __tablename__ = "versions"

    document_id = Column(UUID(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), index=True, nullable=False)
    label = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    is_active = Column(Boolean, default=False)

    # Relationships
    document = relationship("Document", back_populates="versions")
