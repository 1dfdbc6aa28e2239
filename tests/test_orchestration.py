from __future__ import annotations

import pytest

from data.models import NotFoundError, Todo, ValidationError
from data.orchestration import build_orchestration
from data.storage import MemoryStorage


def test_retrieve_empty_storage() -> None:
    assert build_orchestration(MemoryStorage()).retrieve() == ()


def test_upsert_without_id_inserts_trimmed_record(orchestration) -> None:
    before = {t.id for t in orchestration.retrieve()}

    todos = orchestration.upsert_retrieve({"task": "  Buy milk  "})

    assert len(todos) == 2
    new = todos[-1]
    assert new.task == "Buy milk"
    assert new.status == "open"
    assert new.id is not None and new.id not in before


def test_new_ids_are_unique(orchestration) -> None:
    for i in range(20):
        orchestration.upsert_retrieve({"task": f"task {i}"})
    ids = [t.id for t in orchestration.retrieve()]
    assert len(ids) == len(set(ids)) == 21


@pytest.mark.parametrize("task", ["", "   ", "\t\n"])
def test_empty_task_is_rejected_and_nothing_changes(orchestration, task) -> None:
    before = orchestration.retrieve()
    with pytest.raises(ValidationError):
        orchestration.upsert_retrieve({"task": task})
    assert orchestration.retrieve() == before


def test_update_replaces_fields_only_for_that_id(orchestration) -> None:
    orchestration.upsert_retrieve({"task": "B"})
    other = orchestration.retrieve()[1]

    todos = orchestration.upsert_retrieve(Todo(id=1, task="A2", status="done"))

    assert todos[0] == Todo(id=1, task="A2", status="done")
    assert todos[1] == other


def test_update_unknown_id_is_not_found(orchestration) -> None:
    before = orchestration.retrieve()
    with pytest.raises(NotFoundError):
        orchestration.upsert_retrieve(Todo(id="nope", task="X", status="open"))
    assert orchestration.retrieve() == before


def test_blank_status_defaults_to_open_for_new_records(orchestration) -> None:
    todos = orchestration.upsert_retrieve({"task": "B", "status": "  "})
    assert todos[-1].status == "open"


def test_partial_update_keeps_fields_it_leaves_out(storage) -> None:
    storage.seed("todos", [{"id": 1, "task": "A", "status": "done"}])
    orchestration = build_orchestration(storage, "todos")

    assert orchestration.upsert_retrieve({"id": 1, "task": "A2"}) == (Todo(id=1, task="A2", status="done"),)
    assert orchestration.upsert_retrieve({"id": 1, "status": "in progress"}) == (
        Todo(id=1, task="A2", status="in progress"),
    )


def test_blank_status_on_update_keeps_stored_status(storage) -> None:
    storage.seed("todos", [{"id": 1, "task": "A", "status": "done"}])
    orchestration = build_orchestration(storage, "todos")

    todos = orchestration.upsert_retrieve(Todo(id=1, task="A2", status="  "))

    assert todos == (Todo(id=1, task="A2", status="done"),)


@pytest.mark.parametrize("blank_id", ["", "   "])
def test_blank_id_inserts_new_record(orchestration, blank_id) -> None:
    todos = orchestration.upsert_retrieve({"id": blank_id, "task": "B"})

    assert len(todos) == 2
    assert todos[-1].task == "B"
    assert todos[-1].id not in (None, "", "   ", 1)


def test_delete_keeps_order_of_the_rest(orchestration) -> None:
    orchestration.upsert_retrieve({"task": "B"})
    orchestration.upsert_retrieve({"task": "C"})
    b, c = orchestration.retrieve()[1:]

    todos = orchestration.delete_retrieve(1)

    assert todos == (b, c)


def test_delete_missing_id_is_idempotent(orchestration) -> None:
    before = orchestration.retrieve()
    assert orchestration.delete_retrieve("missing") == before
    assert orchestration.delete_retrieve("missing") == before


def test_upsert_result_matches_retrieve(orchestration) -> None:
    result = orchestration.upsert_retrieve({"task": "Round trip", "status": "in progress"})
    assert result == orchestration.retrieve()


def test_create_update_delete_scenario(orchestration) -> None:
    todos = orchestration.upsert_retrieve({"task": "B"})
    assert len(todos) == 2
    assert todos[1].task == "B"

    todos = orchestration.upsert_retrieve(Todo(id=1, task="A2", status="done"))
    assert todos[0] == Todo(id=1, task="A2", status="done")

    todos = orchestration.delete_retrieve(1)
    assert len(todos) == 1
    assert todos[0].task == "B"
