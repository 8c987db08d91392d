"""Errors raised by the status update services.

Each error knows its HTTP status and the JSON body the routes return for it.
"""

from typing import Optional

from fastapi import status


class InventoryStatusError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InputError(InventoryStatusError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(InventoryStatusError):
    status_code = status.HTTP_404_NOT_FOUND


class TransitionValidationError(InventoryStatusError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        validation_errors: Optional[list[dict]] = None,
        valid_items: Optional[int] = None,
        total_items: Optional[int] = None,
        not_found_ids: Optional[list[str]] = None,
    ):
        super().__init__(message, details)
        self.validation_errors = validation_errors
        self.valid_items = valid_items
        self.total_items = total_items
        self.not_found_ids = not_found_ids

    def to_response(self) -> dict:
        body = super().to_response()
        if self.validation_errors is not None:
            body["validation_errors"] = self.validation_errors
            body["valid_items"] = self.valid_items
            body["total_items"] = self.total_items
            body["not_found_ids"] = self.not_found_ids or []
        return body


class StorePersistenceError(InventoryStatusError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
