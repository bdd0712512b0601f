class ServiceError(Exception):
    """Base exception for all service-layer errors.

    Rendered to the client as ``{"error": ..., "message": ...}``.
    """

    def __init__(self, error: str, message: str, status_code: int = 500):
        self.error = error
        self.message = message
        self.status_code = status_code
        super().__init__(f"{error}: {message}")

    def to_content(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class ValidationError(ServiceError):
    """Raised when the caller sent an incomplete or malformed request."""

    def __init__(
        self,
        message: str = "Both user_id and challenge are required",
        error: str = "Missing required fields",
    ):
        super().__init__(error, message, status_code=400)


class DeletionError(ServiceError):
    """Raised when the deletion backend reports a failure."""

    def __init__(self, message: str = "Unable to delete user data from our systems"):
        super().__init__("Data deletion failed", message, status_code=500)


class UnexpectedError(ServiceError):
    """Raised for any other failure while handling a deletion callback."""

    def __init__(
        self,
        message: str = "An unexpected error occurred while processing the request",
    ):
        super().__init__("Internal server error", message, status_code=500)


class NotFoundError(ServiceError):
    """Raised when no route matches the request."""

    def __init__(self, method: str, path: str):
        super().__init__("Not found", f"Route {method} {path} not found", status_code=404)
