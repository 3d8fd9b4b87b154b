from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskFormInput(BaseModel):
    """Raw values posted by the create/edit task form.

    Nothing here is trimmed or coerced: the values are echoed back into the
    form exactly as typed when validation fails.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    description: str = ""
    status: Optional[str] = None
    due_day: str = Field(default="", alias="due-date-day")
    due_month: str = Field(default="", alias="due-date-month")
    due_year: str = Field(default="", alias="due-date-year")

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "TaskFormInput":
        # Uploads have no place in this form; keep plain strings only.
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        return cls.model_validate(fields)

    def echo(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
