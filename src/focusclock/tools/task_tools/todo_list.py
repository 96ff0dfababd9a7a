import uuid
from dataclasses import dataclass
from focusclock.utils import Event
from focusclock.utils import custom_exception as ce
from focusclock.utils.logging_handler import setup_logger


@dataclass
class Todo:
    id: str
    text: str
    completed: bool = False


class TodoList:
    def __init__(self):
        """In-memory, insertion-ordered task list. Nothing here is persisted."""
        self.logger = setup_logger(__name__)
        self._items = []

        self.on_change = Event()
        self.on_completed = Event()

    @property
    def items(self):
        return tuple(self._items)

    @property
    def completed_count(self) -> int:
        return sum(1 for todo in self._items if todo.completed)

    @property
    def remaining_count(self) -> int:
        return len(self._items) - self.completed_count

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self.items)

    def add(self, text: str):
        """Append a todo. Blank text is declined and None is returned."""
        text = (text or "").strip()
        if not text:
            self.logger.info("Ignoring todo with empty text.")
            return None
        todo = Todo(uuid.uuid4().hex, text)
        self._items.append(todo)
        self.logger.info(f"Todo added: '{text}'.")
        self.on_change.emit(action="add", todo=todo)
        return todo

    def toggle(self, todo_id: str) -> bool:
        """Flip completion. on_completed fires only for the not-done -> done direction."""
        try:
            todo = self._find(todo_id)
        except ce.TodoNotFoundError as tnf:
            self.logger.warning(tnf)
            return False
        todo.completed = not todo.completed
        self.logger.info(f"Todo '{todo.text}' marked {'done' if todo.completed else 'not done'}.")
        self.on_change.emit(action="toggle", todo=todo)
        if todo.completed:
            self.on_completed.emit(todo=todo)
        return True

    def delete(self, todo_id: str) -> bool:
        try:
            todo = self._find(todo_id)
        except ce.TodoNotFoundError as tnf:
            self.logger.warning(tnf)
            return False
        self._items.remove(todo)
        self.logger.info(f"Todo '{todo.text}' deleted.")
        self.on_change.emit(action="delete", todo=todo)
        return True

    def get(self, todo_id: str):
        try:
            return self._find(todo_id)
        except ce.TodoNotFoundError:
            return None

    def _find(self, todo_id: str) -> Todo:
        for todo in self._items:
            if todo.id == todo_id:
                return todo
        raise ce.TodoNotFoundError(f"Todo '{todo_id}' not found.")
