"""Error types for the task API and their translation into HTTP responses."""

from typing import Any, Dict, List

from django.http import HttpResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler


class TaskStoreError(Exception):
    """Base class for failures of the underlying task file."""

    public_message = "Error reading tasks file"

    def __init__(self, path: Any = None) -> None:
        self.path = path
        super().__init__(f"{self.public_message}: {path}")


class TaskFileReadError(TaskStoreError):
    """The task file could not be opened or read."""


class TaskFileParseError(TaskStoreError):
    """The task file is not JSON of the form {"tasks": [...]}."""


class TaskFileWriteError(TaskStoreError):
    public_message = "Error writing tasks file"


class TaskNotFound(Exception):
    public_message = "Task not found"


def text_response(message: str, status_code: int) -> HttpResponse:
    return HttpResponse(message, status=status_code, content_type="text/plain; charset=utf-8")


def field_errors(detail: Any) -> List[Dict[str, str]]:
    """Flatten DRF validation detail into [{"field": ..., "message": ...}, ...]."""
    if isinstance(detail, dict):
        errors = []
        for field, messages in detail.items():
            if not isinstance(messages, list):
                messages = [messages]
            errors.extend({"field": field, "message": str(m)} for m in messages)
        return errors
    if not isinstance(detail, list):
        detail = [detail]
    return [{"field": api_settings.NON_FIELD_ERRORS_KEY, "message": str(m)} for m in detail]


def task_exception_handler(exc, context):
    """DRF exception handler for the task views.

    - validation failures -> 400 {"errors": [...]}
    - unparseable JSON body -> 400 {"error": "Invalid JSON data"}
    - missing task -> 404 plain text
    - task file failures -> 500 plain text
    Anything else goes to DRF's default handler.
    """
    if isinstance(exc, exceptions.ValidationError):
        return Response({"errors": field_errors(exc.detail)}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, exceptions.ParseError):
        return Response({"error": "Invalid JSON data"}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, TaskNotFound):
        return text_response(exc.public_message, status.HTTP_404_NOT_FOUND)
    if isinstance(exc, TaskStoreError):
        return text_response(exc.public_message, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return exception_handler(exc, context)
