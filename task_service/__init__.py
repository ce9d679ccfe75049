from task_service.errors import TaskNotFound, TaskServiceError, TaskValidationError
from task_service.repository import TaskRepository

__version__ = "0.1.0"

__all__ = ["TaskRepository", "TaskNotFound", "TaskServiceError", "TaskValidationError"]
