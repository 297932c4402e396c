class ChatAPIError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(ChatAPIError):
    status_code = 400
    detail = "Invalid request"


class ConflictError(ChatAPIError):
    # The original API reports duplicates as a plain 400.
    status_code = 400
    detail = "Already exists"


class AuthenticationError(ChatAPIError):
    status_code = 401
    detail = "Invalid credentials"


class PermissionDeniedError(ChatAPIError):
    status_code = 403
    detail = "Forbidden"


class NotFoundError(ChatAPIError):
    status_code = 404
    detail = "Not found"


class PayloadTooLargeError(ChatAPIError):
    status_code = 413
    detail = "File too large"


class UnsupportedMediaError(ChatAPIError):
    status_code = 415
    detail = "Only images and PDFs are allowed"
