from pydantic import BaseModel


class UploadResponse(BaseModel):
    id: str
    filename: str
    originalName: str
    path: str
    size: int
    mimetype: str
    uploadedBy: str
    uploadedAt: str
