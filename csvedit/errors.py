# csvedit/errors.py
from typing import Optional


class CsvEditError(Exception):
    """Base error; carries the HTTP status it maps to at the handler boundary."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class NotFound(CsvEditError):
    status_code = 404


class InvalidIndex(CsvEditError):
    status_code = 400


class InvalidPayload(CsvEditError):
    status_code = 400


class InvalidFilename(InvalidPayload):
    pass


class IOFailure(CsvEditError):
    status_code = 500


class MalformedInput(IOFailure):
    pass
