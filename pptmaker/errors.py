from typing import Optional


class BackendError(Exception):
    """Base for every failure the backend client can surface."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self)


class InvalidEndpointError(BackendError):
    def __init__(self, url: str):
        super().__init__(f"Invalid server URL: {url}")
        self.url = url


class NetworkError(BackendError):
    def __init__(self, cause: BaseException):
        super().__init__(f"Network error: {cause}", cause)


class ServerError(BackendError):
    """Non-200 response carrying a server-supplied `detail` string."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Server error: {detail}")
        self.status_code = status_code
        self.detail = detail


class UnexpectedStatusError(BackendError):
    """Non-200 response with nothing decodable in the body."""

    def __init__(self, status_code: int):
        super().__init__(f"Server error: HTTP {status_code}")
        self.status_code = status_code


class DecodingError(BackendError):
    def __init__(self, cause: BaseException):
        super().__init__(f"Failed to decode response: {cause}", cause)
