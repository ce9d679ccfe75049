class TaskServiceError(Exception):
    pass


class TaskNotFound(TaskServiceError):
    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskValidationError(TaskServiceError):
    """Raised when task input fails validation. ``reason`` is safe to show to clients."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
