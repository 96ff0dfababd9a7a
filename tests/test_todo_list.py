from focusclock.tools.task_tools.todo_list import TodoList


def test_add_keeps_insertion_order_and_unique_ids():
    todos = TodoList()
    first = todos.add("Write report")
    second = todos.add("  Review PR  ")
    assert [t.text for t in todos] == ["Write report", "Review PR"]
    assert first.id != second.id
    assert todos.remaining_count == 2


def test_blank_text_is_declined():
    todos = TodoList()
    assert todos.add("   ") is None
    assert todos.add("") is None
    assert len(todos) == 0


def test_completion_event_only_on_false_to_true():
    todos = TodoList()
    completed = []
    todos.on_completed.add_listener(lambda todo: completed.append(todo.id))
    todo = todos.add("Write report")

    assert todos.toggle(todo.id)
    assert todos.toggle(todo.id)
    assert todos.toggle(todo.id)

    assert completed == [todo.id, todo.id]
    assert todos.completed_count == 1


def test_unknown_ids_are_ignored():
    todos = TodoList()
    todos.add("Write report")
    assert todos.toggle("missing") is False
    assert todos.delete("missing") is False
    assert todos.get("missing") is None
    assert len(todos) == 1


def test_delete_removes_item():
    todos = TodoList()
    keep = todos.add("a")
    drop = todos.add("b")
    assert todos.delete(drop.id)
    assert todos.items == (keep,)


def test_todo_fields_are_id_text_completed():
    from dataclasses import fields

    from focusclock.tools.task_tools.todo_list import Todo

    assert [f.name for f in fields(Todo)] == ["id", "text", "completed"]
    todo = TodoList().add("Write report")
    assert todo.completed is False
    assert len(todo.id) == 32
