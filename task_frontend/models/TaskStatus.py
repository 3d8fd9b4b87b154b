from enum import Enum


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            # Normalize to uppercase before lookup
            value = value.strip().upper()
            for member in cls:
                if member.value == value:
                    return member
        return None
