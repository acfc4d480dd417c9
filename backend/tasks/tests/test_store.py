import json
import threading
import tempfile
from pathlib import Path

from django.test import SimpleTestCase, override_settings

from tasks.exceptions import TaskFileParseError, TaskFileReadError, TaskFileWriteError
from tasks.store import TaskStore, get_task_store, next_id


class NextIdTests(SimpleTestCase):
    def test_empty_collection_starts_at_one(self):
        self.assertEqual(next_id([]), 1)

    def test_uses_highest_id_not_last(self):
        """Ids are never reused even when the last task isn't the highest."""
        tasks = [{"id": 7}, {"id": 2}]
        self.assertEqual(next_id(tasks), 8)


class TaskStoreTests(SimpleTestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "task.json"
        self.store = TaskStore(self.path)

    def test_load_returns_tasks_array(self):
        tasks = [{"id": 1, "title": "A", "description": "d", "completed": False, "priority": "low"}]
        self.path.write_text(json.dumps({"tasks": tasks}), encoding="utf-8")
        self.assertEqual(self.store.load(), tasks)

    def test_missing_file_is_read_error(self):
        with self.assertLogs("tasks.store", level="ERROR"):
            with self.assertRaises(TaskFileReadError):
                self.store.load()

    def test_invalid_json_is_parse_error(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("tasks.store", level="ERROR"):
            with self.assertRaises(TaskFileParseError):
                self.store.load()

    def test_wrong_shape_is_parse_error(self):
        self.path.write_text(json.dumps([{"id": 1}]), encoding="utf-8")
        with self.assertLogs("tasks.store", level="ERROR"):
            with self.assertRaises(TaskFileParseError):
                self.store.load()

    def test_non_object_entries_are_parse_error(self):
        self.path.write_text(json.dumps({"tasks": [1, 2]}), encoding="utf-8")
        with self.assertLogs("tasks.store", level="ERROR"):
            with self.assertRaises(TaskFileParseError):
                self.store.load()

    def test_save_writes_pretty_printed_document(self):
        tasks = [{"id": 1, "title": "Café", "description": "d", "completed": True, "priority": "high"}]
        self.store.save(tasks)
        raw = self.path.read_text(encoding="utf-8")
        self.assertEqual(raw, json.dumps({"tasks": tasks}, indent=2, ensure_ascii=False))

    def test_save_to_missing_directory_is_write_error(self):
        store = TaskStore(self.path.parent / "missing" / "task.json")
        with self.assertLogs("tasks.store", level="ERROR"):
            with self.assertRaises(TaskFileWriteError):
                store.save([])

    def test_mutate_saves_on_clean_exit(self):
        self.store.save([])
        with self.store.mutate() as tasks:
            tasks.append({"id": 1})
        self.assertEqual(self.store.load(), [{"id": 1}])

    def test_mutate_discards_changes_when_body_raises(self):
        self.store.save([{"id": 1}])
        with self.assertRaises(RuntimeError):
            with self.store.mutate() as tasks:
                tasks.clear()
                raise RuntimeError("boom")
        self.assertEqual(self.store.load(), [{"id": 1}])

    def test_concurrent_mutations_do_not_lose_updates(self):
        self.store.save([])

        def add_task():
            # separate store instances share the lock for the same file
            store = TaskStore(self.path)
            with store.mutate() as tasks:
                tasks.append({"id": next_id(tasks)})

        threads = [threading.Thread(target=add_task) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [t["id"] for t in self.store.load()]
        self.assertEqual(ids, list(range(1, 21)))

    def test_initialize_creates_empty_collection_once(self):
        self.assertTrue(self.store.initialize())
        self.assertEqual(self.store.load(), [])

        self.store.save([{"id": 1}])
        self.assertFalse(self.store.initialize())
        self.assertEqual(self.store.load(), [{"id": 1}])

        self.assertTrue(self.store.initialize(force=True))
        self.assertEqual(self.store.load(), [])

    def test_get_task_store_follows_setting(self):
        with override_settings(TASKS_FILE=self.path):
            self.assertEqual(get_task_store().path, self.path)
