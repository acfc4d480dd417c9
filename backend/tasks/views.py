import logging
import re
from typing import List, Dict, Any, Optional

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .exceptions import TaskNotFound, text_response
from .serializers import TaskInputSerializer, DEFAULT_PRIORITY
from .store import TaskStore, get_task_store, next_id

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid api request"

COMPLETION_STATUSES = {"true": True, "false": False}

TASK_ID_RE = re.compile(r"-?[0-9]+")


def invalid_api_request(request, *args, **kwargs):
    """Catch-all for any path or method the API doesn't serve."""
    return text_response(INVALID_REQUEST_MESSAGE, status.HTTP_404_NOT_FOUND)


def parse_task_id(raw: str) -> Optional[int]:
    """Integer id from a URL segment, or None when it isn't one."""
    if not isinstance(raw, str) or not TASK_ID_RE.fullmatch(raw):
        return None
    return int(raw)


def find_index(tasks: List[Dict[str, Any]], raw_id: str) -> int:
    """Position of the task with the given id. Raises TaskNotFound."""
    task_id = parse_task_id(raw_id)
    if task_id is not None:
        for i, t in enumerate(tasks):
            if t.get("id") == task_id:
                return i
    raise TaskNotFound()


def build_task(task_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": task_id,
        "title": data["title"],
        "description": data["description"],
        "completed": data.get("completed") or False,
        "priority": data.get("priority") or DEFAULT_PRIORITY,
    }


def merge_task(existing: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply an update onto a stored task.

    Any submitted value that is falsy ("", False, 0 or omitted) keeps the stored
    value instead. In particular `completed: false` cannot un-complete a task;
    clients have to delete and recreate it.
    """
    return {
        "id": existing["id"],
        "title": data.get("title") or existing.get("title"),
        "description": data.get("description") or existing.get("description"),
        "completed": data.get("completed") or existing.get("completed", False),
        "priority": data.get("priority") or existing.get("priority", DEFAULT_PRIORITY),
    }


class TaskAPIView(APIView):
    """Base view: hands out the task store and 404s unsupported methods."""

    store_factory = staticmethod(get_task_store)
    # OPTIONS falls through to http_method_not_allowed
    metadata_class = None

    def get_store(self) -> TaskStore:
        return self.store_factory()

    def http_method_not_allowed(self, request, *args, **kwargs):
        return invalid_api_request(request, *args, **kwargs)


class TaskList(TaskAPIView):
    """
    GET  /tasks  -> every task, in insertion order
    POST /tasks  -> validate, assign the next id, apply defaults, persist
    """

    def get(self, request):
        return Response(self.get_store().load(), status=status.HTTP_200_OK)

    def post(self, request):
        serializer = TaskInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with self.get_store().mutate() as tasks:
            task = build_task(next_id(tasks), serializer.validated_data)
            tasks.append(task)

        logger.info("Created task id=%s", task["id"])
        return Response(task, status=status.HTTP_201_CREATED)


class TaskDetail(TaskAPIView):
    """GET /tasks/<id>"""

    def get(self, request, task_id):
        tasks = self.get_store().load()
        return Response(tasks[find_index(tasks, task_id)], status=status.HTTP_200_OK)


class TaskUpdate(TaskAPIView):
    """
    PUT    /task/<id>  -> validate and merge onto the stored task
    DELETE /task/<id>  -> remove it

    The singular "task" path is part of the public API; GET/POST use "tasks".
    """

    def put(self, request, task_id):
        serializer = TaskInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with self.get_store().mutate() as tasks:
            idx = find_index(tasks, task_id)
            tasks[idx] = merge_task(tasks[idx], serializer.validated_data)
            updated = tasks[idx]

        logger.info("Updated task id=%s", updated["id"])
        return Response(updated, status=status.HTTP_200_OK)

    def delete(self, request, task_id):
        with self.get_store().mutate() as tasks:
            removed = tasks.pop(find_index(tasks, task_id))

        logger.info("Deleted task id=%s", removed["id"])
        return text_response("Task deleted successfully", status.HTTP_200_OK)


class TasksByPriority(TaskAPIView):
    """
    GET /tasks/priority/<level>

    The level isn't checked against the allowed priorities: an unknown level
    simply matches nothing and yields an empty list.
    """

    def get(self, request, level):
        tasks = self.get_store().load()
        return Response([t for t in tasks if t.get("priority") == level], status=status.HTTP_200_OK)


class TasksByCompletion(TaskAPIView):
    """
    GET /tasks/completion/<status>

    "true" selects completed tasks and "false" pending ones. Any other value
    matches nothing. An empty result is a 404.
    """

    def get(self, request, status_value):
        flag = COMPLETION_STATUSES.get(status_value)
        tasks = self.get_store().load()
        matching = [t for t in tasks if flag is not None and t.get("completed") is flag]

        if not matching:
            label = "Done" if flag else "Pending"
            return text_response(
                f"No Task found with completion status as {label}", status.HTTP_404_NOT_FOUND
            )
        return Response(matching, status=status.HTTP_200_OK)
