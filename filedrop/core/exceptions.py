# filedrop/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoFileSelectedError(AppError):
    def __init__(self, message: str = "No file selected.") -> None:
        super().__init__(message, status_code=400)


class ExtensionNotAllowedError(AppError):
    def __init__(self, extension: str = "") -> None:
        shown = extension or "(none)"
        super().__init__(f"File extension not permitted: {shown}", status_code=400)
        self.extension = extension


class FileTooLargeError(AppError):
    def __init__(self, max_bytes: int) -> None:
        limit_mb = max_bytes / (1024 * 1024)
        super().__init__(
            f"File too large: the limit is {limit_mb:g} MB.", status_code=400
        )
        self.max_bytes = max_bytes


class UnexpectedFieldError(AppError):
    def __init__(self, message: str = "Unexpected file field.") -> None:
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    def __init__(self, message: str = "File not found.") -> None:
        super().__init__(message, status_code=404)


class NameCollisionError(AppError):
    def __init__(self, stored_name: str) -> None:
        super().__init__(f"Stored name already in use: {stored_name}", status_code=409)
        self.stored_name = stored_name


class StorageError(AppError):
    def __init__(self, message: str = "Storage failure.") -> None:
        super().__init__(message, status_code=500)
