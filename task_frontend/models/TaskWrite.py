from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .TaskStatus import TaskStatus


class TaskWrite(BaseModel):
    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO
    dueDate: Optional[datetime] = None


class StatusUpdate(BaseModel):
    status: Optional[str] = None
