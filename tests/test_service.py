"""
Todo Test Suite — TodoService
==============================
Tests for seeding, the five CRUD operations, and action logging.

Usage:
    python -m pytest tests/test_service.py -v
"""
import sys
import os
import threading
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from todoapi.errors import InvalidInput, NotFound
from todoapi.logger import TodoLogger, ACTION_LOGGER
from todoapi.models import TodoItem
from todoapi.service import TodoService
from todoapi.store import InMemoryTodoStore


class RecordingLogger(TodoLogger):
    """Captures actions instead of emitting them."""

    def __init__(self):
        super().__init__()
        self.actions = []

    def log_action(self, action, details):
        self.actions.append((action, dict(details)))


def _make_service(seed=True):
    logger = RecordingLogger()
    service = TodoService(InMemoryTodoStore(), logger=logger)
    if seed:
        service.initialize()
    return service, logger


# ─────────────────────────────────────────────
#  Initialization Tests
# ─────────────────────────────────────────────

class TestInitialize(unittest.TestCase):

    def test_seeds_empty_store(self):
        service, logger = _make_service(seed=False)
        seeded = service.initialize()
        items = service.list_all()
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0], TodoItem(id=1, name="Item1", is_complete=False))
        self.assertEqual(seeded, items[0])
        self.assertEqual(logger.actions[0][0], "seed")

    def test_does_not_seed_twice(self):
        service, _ = _make_service()
        self.assertIsNone(service.initialize())
        self.assertEqual(len(service.list_all()), 1)

    def test_does_not_seed_populated_store(self):
        store = InMemoryTodoStore()
        store.append(TodoItem(name="existing"))
        service = TodoService(store, logger=RecordingLogger())
        self.assertIsNone(service.initialize())
        self.assertEqual([i.name for i in service.list_all()], ["existing"])

    def test_custom_seed_name(self):
        service, _ = _make_service(seed=False)
        service.initialize("Welcome")
        self.assertEqual(service.list_all()[0].name, "Welcome")

    def test_unseeded_list_is_empty(self):
        service, _ = _make_service(seed=False)
        self.assertEqual(service.list_all(), [])

    def test_count(self):
        service, _ = _make_service()
        self.assertEqual(service.count(), 1)
        service.create(TodoItem(name="x"))
        self.assertEqual(service.count(), 2)
        self.assertEqual(TodoService.count.__todo_contract__, "atomic")


# ─────────────────────────────────────────────
#  CRUD Tests
# ─────────────────────────────────────────────

class TestCreate(unittest.TestCase):

    def setUp(self):
        self.service, self.logger = _make_service()

    def test_assigns_next_id(self):
        created = self.service.create(TodoItem(name="Buy milk"))
        self.assertEqual(created.item, TodoItem(id=2, name="Buy milk", is_complete=False))

    def test_locator_points_at_item(self):
        created = self.service.create(TodoItem(name="Buy milk"))
        self.assertEqual(created.locator.route, "GetTodo")
        self.assertEqual(created.locator.params, {"todo_id": 2})
        self.assertEqual(created.locator.path(), "/api/todo/2")

    def test_round_trip_through_get(self):
        created = self.service.create(TodoItem(name="Buy milk", is_complete=True))
        self.assertEqual(self.service.get_by_id(created.item.id), created.item)

    def test_client_id_overwritten(self):
        created = self.service.create(TodoItem(id=1, name="dup"))
        self.assertEqual(created.item.id, 2)
        self.assertEqual(self.service.get_by_id(1).name, "Item1")

    def test_ids_unique(self):
        ids = {self.service.create(TodoItem(name="x")).item.id for _ in range(20)}
        self.assertEqual(len(ids), 20)
        self.assertNotIn(None, ids)

    def test_names_need_not_be_unique(self):
        self.service.create(TodoItem(name="Item1"))
        self.assertEqual(len(self.service.list_all()), 2)

    def test_missing_item_invalid(self):
        with self.assertRaises(InvalidInput):
            self.service.create(None)
        self.assertEqual(len(self.service.list_all()), 1)

    def test_logs_create(self):
        self.service.create(TodoItem(name="Buy milk"))
        self.assertIn(("create", {"id": 2, "name": "Buy milk"}), self.logger.actions)

    def test_logs_rejected_create(self):
        with self.assertRaises(InvalidInput):
            self.service.create(None)
        self.assertEqual(self.logger.actions[-1], ("create.rejected", {"reason": "missing body"}))


class TestGetById(unittest.TestCase):

    def test_missing_not_found(self):
        service, _ = _make_service()
        with self.assertRaises(NotFound) as ctx:
            service.get_by_id(404)
        self.assertEqual(ctx.exception.todo_id, 404)

    def test_logs_missing(self):
        service, logger = _make_service()
        with self.assertRaises(NotFound):
            service.get_by_id(99)
        self.assertEqual(logger.actions[-1], ("get.missing", {"id": 99}))

    def test_missing_lookup_reaches_action_log(self):
        service = TodoService(InMemoryTodoStore())
        service.initialize()
        with self.assertLogs(ACTION_LOGGER, level="INFO") as captured:
            with self.assertRaises(NotFound):
                service.get_by_id(99)
        self.assertEqual(captured.records[-1].getMessage(), "get.missing id=99")

    def test_returned_item_is_detached(self):
        service, _ = _make_service()
        item = service.get_by_id(1)
        item.name = "changed"
        self.assertEqual(service.get_by_id(1).name, "Item1")


class TestReplace(unittest.TestCase):

    def setUp(self):
        self.service, self.logger = _make_service()
        self.service.create(TodoItem(name="Buy milk"))

    def test_replace_updates_fields(self):
        self.service.replace(2, TodoItem(id=2, name="Buy milk", is_complete=True))
        self.assertEqual(self.service.get_by_id(2), TodoItem(id=2, name="Buy milk", is_complete=True))

    def test_replace_can_rename(self):
        self.service.replace(2, TodoItem(id=2, name="Buy oat milk"))
        self.assertEqual(self.service.get_by_id(2).name, "Buy oat milk")

    def test_returns_nothing(self):
        self.assertIsNone(self.service.replace(2, TodoItem(id=2, name="x")))

    def test_missing_item_invalid(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(2, None)

    def test_id_mismatch_invalid_for_existing(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(2, TodoItem(id=1, name="x"))
        self.assertEqual(self.service.get_by_id(2).name, "Buy milk")

    def test_id_mismatch_invalid_for_missing(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(99, TodoItem(id=98, name="x"))

    def test_body_without_id_invalid(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(2, TodoItem(name="x"))

    def test_missing_not_found(self):
        with self.assertRaises(NotFound):
            self.service.replace(99, TodoItem(id=99, name="x"))

    def test_logs_rejected_mismatch(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(2, TodoItem(id=1, name="x"))
        self.assertEqual(self.logger.actions[-1], ("replace.rejected", {"id": 2, "body_id": 1}))

    def test_logs_rejected_missing_body(self):
        with self.assertRaises(InvalidInput):
            self.service.replace(2, None)
        self.assertEqual(self.logger.actions[-1], ("replace.rejected", {"id": 2, "body_id": None}))

    def test_logs_missing(self):
        with self.assertRaises(NotFound):
            self.service.replace(99, TodoItem(id=99, name="x"))
        self.assertEqual(self.logger.actions[-1], ("replace.missing", {"id": 99}))

    def test_logs_replace(self):
        self.service.replace(2, TodoItem(id=2, name="Buy milk", is_complete=True))
        action, details = self.logger.actions[-1]
        self.assertEqual(action, "replace")
        self.assertTrue(details["is_complete"])


class TestDelete(unittest.TestCase):

    def setUp(self):
        self.service, self.logger = _make_service()
        self.service.create(TodoItem(name="Buy milk"))

    def test_delete_then_get_not_found(self):
        self.service.delete(2)
        with self.assertRaises(NotFound):
            self.service.get_by_id(2)

    def test_missing_not_found(self):
        with self.assertRaises(NotFound):
            self.service.delete(99)

    def test_delete_twice_not_found(self):
        self.service.delete(2)
        with self.assertRaises(NotFound):
            self.service.delete(2)

    def test_deleted_id_never_reassigned(self):
        self.service.delete(2)
        created = self.service.create(TodoItem(name="next"))
        self.assertEqual(created.item.id, 3)

    def test_delete_seed_leaves_empty(self):
        self.service.delete(1)
        self.service.delete(2)
        self.assertEqual(self.service.list_all(), [])

    def test_logs_missing(self):
        with self.assertRaises(NotFound):
            self.service.delete(99)
        self.assertEqual(self.logger.actions[-1], ("delete.missing", {"id": 99}))


# ─────────────────────────────────────────────
#  Scenario / Concurrency Tests
# ─────────────────────────────────────────────

class TestScenario(unittest.TestCase):

    def test_buy_milk_lifecycle(self):
        service, _ = _make_service()
        self.assertEqual(len(service.list_all()), 1)

        created = service.create(TodoItem(name="Buy milk"))
        self.assertEqual(created.item.id, 2)
        self.assertFalse(created.item.is_complete)
        self.assertEqual(service.get_by_id(2), created.item)

        service.replace(2, TodoItem(id=2, name="Buy milk", is_complete=True))
        self.assertTrue(service.get_by_id(2).is_complete)

        service.delete(2)
        with self.assertRaises(NotFound):
            service.get_by_id(2)


class TestConcurrency(unittest.TestCase):

    def test_parallel_creates_get_unique_ids(self):
        service, _ = _make_service(seed=False)
        ids = []
        ids_lock = threading.Lock()

        def worker():
            for _ in range(50):
                item_id = service.create(TodoItem(name="x")).item.id
                with ids_lock:
                    ids.append(item_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(ids), 400)
        self.assertEqual(len(set(ids)), 400)
        self.assertEqual(len(service.list_all()), 400)

    def test_parallel_deletes_succeed_once(self):
        service, _ = _make_service()
        outcomes = []
        outcomes_lock = threading.Lock()

        def worker():
            try:
                service.delete(1)
                result = "deleted"
            except NotFound:
                result = "missing"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(outcomes.count("deleted"), 1)
        self.assertEqual(outcomes.count("missing"), 7)


if __name__ == "__main__":
    unittest.main()
