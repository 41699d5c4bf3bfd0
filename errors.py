from typing import Optional

MISSING_FIELDS_MESSAGE = "Missing required fields: pot_id, raw_value, moisture_percent"


class ReadingServiceError(Exception):
    """Base error; carries the HTTP status and the JSON error body."""

    status_code = 500
    error = "Something went wrong!"

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.error
        self.details = details if details is not None else self.error
        super().__init__(self.error)

    def to_dict(self) -> dict:
        return {"error": self.error, "details": self.details}


class ValidationError(ReadingServiceError):
    status_code = 400
    error = "Invalid request"


class StorageError(ReadingServiceError):
    status_code = 500
    error = "Storage failure"
