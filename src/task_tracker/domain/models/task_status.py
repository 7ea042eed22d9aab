from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle state of a task. Any state may move to any other."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
