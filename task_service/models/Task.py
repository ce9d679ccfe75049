from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Status = Literal["pending", "in-progress", "completed"]
STATUSES = ("pending", "in-progress", "completed")
DEFAULT_STATUS = "pending"


class Task(BaseModel):
    id: str
    title: str
    description: str
    status: Status = DEFAULT_STATUS
    createdAt: datetime
    updatedAt: datetime
