import logging

from fastapi import FastAPI, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from chatapi.core.config import get_auth_mode, get_log_level, get_port, get_storage_backend, get_upload_dir
from chatapi.core.exceptions import ChatAPIError
from chatapi.db.session import engine, Base
from chatapi.models import User, Chat, ChatParticipant, Message, Upload  # noqa: F401
from chatapi.api.auth import router as auth_router
from chatapi.api.chats import router as chats_router
from chatapi.api.deps import get_store
from chatapi.api.messages import router as messages_router
from chatapi.api.uploads import router as uploads_router
from chatapi.store.base import ChatStore

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Chat API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Refuse to start on an unknown AUTH_MODE or STORAGE_BACKEND
get_auth_mode()

# Create tables
if get_storage_backend() == "sql":
    Base.metadata.create_all(bind=engine)


@app.exception_handler(ChatAPIError)
async def chat_api_error_handler(request: Request, exc: ChatAPIError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are plain 400s, like missing fields."""
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Uploaded files: /uploads/<uuid>-photo.png -> UPLOAD_DIR/<uuid>-photo.png
_upload_dir = get_upload_dir()
_upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(_upload_dir)), name="uploads")

# Include routers
app.include_router(auth_router)
app.include_router(chats_router)
app.include_router(messages_router)
app.include_router(uploads_router)


@app.get("/health", tags=["Health"])
def health_check(store: ChatStore = Depends(get_store)):
    return {"status": "OK", "storage": store.backend}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=get_port())
