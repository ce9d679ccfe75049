from typing import Any, Optional

from pydantic import BaseModel


# Fields stay loose here; TaskRepository owns validation order.
class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Any = None
