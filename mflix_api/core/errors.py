from typing import Dict, Iterable, Optional

class ApiError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code: int = 500
    default_error: str = "Internal Server Error"

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.default_error
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, str]:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body

class NotFoundError(ApiError):
    status_code = 404
    default_error = "Not Found"

class ValidationError(ApiError):
    status_code = 400
    default_error = "Bad Request"

class StoreError(ApiError):
    """Raised when the document store cannot complete a call."""

    status_code = 500

class MethodNotAllowedError(ApiError):
    status_code = 405

    def __init__(self, method: str, allowed: Iterable[str] = ()):
        self.method = method.upper()
        self.allowed = sorted(set(allowed))
        super().__init__(f"Method {self.method} Not Allowed")

    @property
    def headers(self) -> Dict[str, str]:
        return {"Allow": ", ".join(self.allowed)}
