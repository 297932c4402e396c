from fastapi import APIRouter, Depends, File, Form, UploadFile

from chatapi.api.deps import AuthUser, get_current_user, get_store, resolve_actor
from chatapi.schemas.upload import UploadResponse
from chatapi.services import uploads
from chatapi.store.base import ChatStore

router = APIRouter(prefix="/api", tags=["Uploads"])


@router.post("/upload", response_model=UploadResponse, status_code=201)
def upload_file(
    file: UploadFile | None = File(None),
    uploadedBy: str | None = Form(None),
    store: ChatStore = Depends(get_store),
    user: AuthUser | None = Depends(get_current_user),
):
    uploader_id = resolve_actor(user, uploadedBy, "uploadedBy")
    if file is None:
        return uploads.store_upload(store, uploader_id, None, None, None)
    try:
        return uploads.store_upload(store, uploader_id, file.filename, file.content_type, file.file)
    finally:
        file.file.close()
