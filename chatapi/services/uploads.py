"""Bounded-size file uploads (images and PDFs) written under UPLOAD_DIR."""
import logging
import re
import uuid
from pathlib import Path, PurePath

from chatapi.core.clock import utcnow
from chatapi.core.config import ALLOWED_UPLOAD_TYPES, get_max_upload_bytes, get_upload_dir
from chatapi.core.exceptions import PayloadTooLargeError, UnsupportedMediaError, ValidationError
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
MAX_FILENAME_BYTES = 255
_ALLOWED = re.compile("|".join(ALLOWED_UPLOAD_TYPES))


def is_allowed(filename: str, content_type: str | None) -> bool:
    """Both the extension and the declared content type must look like an image or PDF."""
    ext = PurePath(filename).suffix.lower().lstrip(".")
    return bool(ext and _ALLOWED.search(ext) and content_type and _ALLOWED.search(content_type.lower()))


def stored_filename(original_name: str) -> str:
    """`<uuid4>-<original>` with the stem cut so the name fits in MAX_FILENAME_BYTES."""
    prefix = f"{uuid.uuid4()}-"
    original = PurePath(original_name)
    suffix = original.suffix
    budget = MAX_FILENAME_BYTES - len(prefix) - len(suffix.encode("utf-8"))
    stem = original.stem.encode("utf-8")[:max(budget, 0)].decode("utf-8", "ignore")
    name = f"{prefix}{stem}{suffix}"
    return name.encode("utf-8")[:MAX_FILENAME_BYTES].decode("utf-8", "ignore")


def _read_bounded(stream, limit: int) -> bytes:
    buf = bytearray()
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            return bytes(buf)
        buf.extend(chunk)
        if len(buf) > limit:
            raise PayloadTooLargeError(f"File exceeds the {limit} byte limit")


def store_upload(
    store: ChatStore,
    uploader_id: str,
    filename: str | None,
    content_type: str | None,
    stream,
    upload_dir: Path | None = None,
    max_bytes: int | None = None,
) -> dict:
    if stream is None or not filename:
        raise ValidationError("No file uploaded")
    original_name = PurePath(filename.replace("\\", "/")).name
    if not is_allowed(original_name, content_type):
        logger.warning("Rejected upload %r (%s) from %s", original_name, content_type, uploader_id)
        raise UnsupportedMediaError()
    limit = get_max_upload_bytes() if max_bytes is None else max_bytes
    try:
        data = _read_bounded(stream, limit)
    except PayloadTooLargeError:
        logger.warning("Rejected oversized upload %r from %s", original_name, uploader_id)
        raise
    if not data:
        raise ValidationError("Uploaded file is empty")

    target_dir = Path(upload_dir or get_upload_dir())
    target_dir.mkdir(parents=True, exist_ok=True)
    stored_name = stored_filename(original_name)
    target = target_dir / stored_name
    target.write_bytes(data)

    try:
        record = store.add_upload({
            "id": str(uuid.uuid4()),
            "filename": stored_name,
            "originalName": original_name,
            "path": f"/uploads/{stored_name}",
            "size": len(data),
            "mimetype": content_type,
            "uploadedBy": uploader_id,
            "uploadedAt": utcnow(),
        })
    except Exception:
        target.unlink(missing_ok=True)
        raise
    logger.info("Stored upload %s (%d bytes) for %s", stored_name, len(data), uploader_id)
    return record
