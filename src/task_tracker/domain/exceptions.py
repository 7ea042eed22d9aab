class TaskNotFoundError(Exception):
    """Raised when a task identifier does not exist in storage."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with id '{task_id}' was not found.")
        self.task_id = task_id


class TaskStorageError(Exception):
    """Raised when the underlying store fails to complete an operation."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Task storage failed during '{operation}'.")
        self.operation = operation
