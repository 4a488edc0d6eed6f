from pydantic import BaseModel, ConfigDict

from formulary.models.forms import Form


class FormState(BaseModel):
    """Snapshot of everything the coordinator publishes to observers."""

    model_config = ConfigDict(frozen=True)

    forms: tuple[Form, ...] = ()
    current_form: Form | None = None
    is_loading: bool = False
    error_message: str | None = None
