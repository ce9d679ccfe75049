from task_service.models.Task import DEFAULT_STATUS, STATUSES, Status, Task
from task_service.models.TaskCreate import TaskCreate
from task_service.models.TaskResponse import (
    ErrorResponse,
    HealthResponse,
    StatusListEnvelope,
    TaskEnvelope,
    TaskListEnvelope,
    TaskResponse,
)
from task_service.models.TaskUpdate import TaskStatusUpdate, TaskUpdate

__all__ = [
    "DEFAULT_STATUS",
    "STATUSES",
    "Status",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskResponse",
    "TaskEnvelope",
    "TaskListEnvelope",
    "StatusListEnvelope",
    "HealthResponse",
    "ErrorResponse",
]
