from typing import Any, Optional

from pydantic import BaseModel


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Any = None


class TaskStatusUpdate(BaseModel):
    status: Any = None
