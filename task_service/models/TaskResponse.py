from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from task_service.models.Task import Status, Task


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: Status
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


class TaskEnvelope(BaseModel):
    success: bool = True
    data: TaskResponse
    message: Optional[str] = None


class TaskListEnvelope(BaseModel):
    success: bool = True
    data: List[TaskResponse]
    total: int


class StatusListEnvelope(BaseModel):
    success: bool = True
    data: List[str]


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
