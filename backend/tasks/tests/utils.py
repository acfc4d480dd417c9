import json
import tempfile
from pathlib import Path

from django.test import override_settings


class TaskFileMixin:
    """Points TASKS_FILE at a fresh temporary file for each test."""

    initial_tasks = None

    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tasks_file = Path(tmp.name) / "task.json"
        if self.initial_tasks is not None:
            self.write_tasks(self.initial_tasks)

        override = override_settings(TASKS_FILE=self.tasks_file)
        override.enable()
        self.addCleanup(override.disable)

    def write_tasks(self, tasks):
        self.tasks_file.write_text(json.dumps({"tasks": tasks}, indent=2), encoding="utf-8")

    def read_tasks(self):
        return json.loads(self.tasks_file.read_text(encoding="utf-8"))["tasks"]
