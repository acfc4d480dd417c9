"""Flat-file task storage.

The whole task collection lives in one JSON document of the form
``{"tasks": [...]}``. Every operation reads the entire file and every mutation
rewrites it in full; nothing is cached between requests.

Read-modify-write sequences go through `TaskStore.mutate()`, which holds a
lock shared by every store pointing at the same file, so two requests served
by the same process cannot compute the same next id or overwrite each other.
Nothing coordinates separate processes.
"""

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from django.conf import settings

from .exceptions import TaskFileParseError, TaskFileReadError, TaskFileWriteError

logger = logging.getLogger(__name__)

Task = Dict[str, Any]

_locks: Dict[Path, Any] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path):
    key = path.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.RLock()
        return _locks[key]


def next_id(tasks: List[Task]) -> int:
    """Return max(existing ids) + 1, or 1 for an empty collection."""
    ids = [t["id"] for t in tasks if isinstance(t.get("id"), int)]
    return max(ids) + 1 if ids else 1


class TaskStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def load(self) -> List[Task]:
        """Read the file and return its `tasks` list.

        Raises TaskFileReadError when the file can't be read and
        TaskFileParseError when it isn't JSON shaped like {"tasks": [...]}.
        """
        with self._lock:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = f.read()
            except OSError as exc:
                logger.exception("Could not read tasks file %s", self.path)
                raise TaskFileReadError(self.path) from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.exception("Tasks file %s is not valid JSON", self.path)
            raise TaskFileParseError(self.path) from exc

        tasks = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(tasks, list) or not all(isinstance(t, dict) for t in tasks):
            logger.error("Tasks file %s has no 'tasks' array of objects", self.path)
            raise TaskFileParseError(self.path)

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Overwrite the file with the full collection (pretty-printed)."""
        with self._lock:
            try:
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump({"tasks": tasks}, f, indent=2, ensure_ascii=False)
            except (OSError, TypeError, ValueError) as exc:
                logger.exception("Could not write tasks file %s", self.path)
                raise TaskFileWriteError(self.path) from exc
        logger.debug("Saved %d task(s) to %s", len(tasks), self.path)

    @contextmanager
    def mutate(self) -> Iterator[List[Task]]:
        """Load the collection under the file lock, yield it, save it on clean exit.

        If the body raises, nothing is written.
        """
        with self._lock:
            tasks = self.load()
            yield tasks
            self.save(tasks)

    def initialize(self, force: bool = False) -> bool:
        """Write an empty collection if the file is missing (always with `force`).

        Returns True when the file was written.
        """
        with self._lock:
            if self.path.exists() and not force:
                return False
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise TaskFileWriteError(self.path) from exc
            self.save([])
        logger.info("Initialized tasks file %s", self.path)
        return True


def get_task_store(path: Optional[Union[str, Path]] = None) -> TaskStore:
    """Build a store for `path`, defaulting to the TASKS_FILE setting."""
    return TaskStore(path if path is not None else settings.TASKS_FILE)
