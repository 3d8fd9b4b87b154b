from pydantic import BaseModel, ConfigDict


class FieldError(BaseModel):
    """A user-correctable problem with one form field.

    ``href`` is the fragment of the offending input so the error summary can
    link straight to it.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    href: str
