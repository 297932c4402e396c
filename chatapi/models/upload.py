from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from chatapi.core.clock import isoformat
from chatapi.db.session import Base


class Upload(Base):
    __tablename__ = "uploads"

    id = Column(String(36), primary_key=True, index=True)
    filename = Column(String(255), nullable=False)  # bounded by stored_filename()
    original_name = Column(Text, nullable=False)
    path = Column(String(270), nullable=False)
    size = Column(Integer, nullable=False)
    mimetype = Column(String(100), nullable=False)
    uploaded_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "originalName": self.original_name,
            "path": self.path,
            "size": self.size,
            "mimetype": self.mimetype,
            "uploadedBy": self.uploaded_by,
            "uploadedAt": isoformat(self.uploaded_at),
        }
