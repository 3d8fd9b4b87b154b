from .FieldError import FieldError
from .TaskForm import TaskFormInput
from .TaskStatus import TaskStatus
from .TaskWrite import StatusUpdate, TaskWrite

__all__ = ["FieldError", "StatusUpdate", "TaskFormInput", "TaskStatus", "TaskWrite"]
