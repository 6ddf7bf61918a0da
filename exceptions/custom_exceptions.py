from enum import Enum

from fastapi import HTTPException


class ErrorStage(str, Enum):
    ACQUISITION = "acquisition"
    CLEANING = "cleaning"
    PERSISTENCE = "persistence"
    SUMMARY = "summary"


class CaptionError(HTTPException):
    """Base error for every caption operation.

    The HTTP detail is the in-band failure payload, so API and MCP callers
    see the same shape. The lower-level exception is kept as ``__cause__``.
    """

    stage = ErrorStage.CLEANING

    def __init__(self, message: str, status_code: int = 400, request_id: str | None = None):
        self.message = message
        self.request_id = request_id
        super().__init__(status_code=status_code, detail=self.to_payload())

    def to_payload(self) -> dict:
        return {
            "success": False,
            "stage": self.stage.value,
            "message": self.message,
            "requestId": self.request_id,
        }

    def with_request_id(self, request_id: str) -> "CaptionError":
        self.request_id = request_id
        self.detail = self.to_payload()
        return self


class CaptionDownloadError(CaptionError):
    stage = ErrorStage.ACQUISITION


class CaptionReadError(CaptionError):
    stage = ErrorStage.CLEANING


class CaptionSaveError(CaptionError):
    stage = ErrorStage.PERSISTENCE

    def __init__(self, message: str, status_code: int = 500, request_id: str | None = None):
        super().__init__(message, status_code=status_code, request_id=request_id)


class SummaryError(CaptionError):
    stage = ErrorStage.SUMMARY

    def __init__(self, message: str, status_code: int = 500, request_id: str | None = None):
        super().__init__(message, status_code=status_code, request_id=request_id)
