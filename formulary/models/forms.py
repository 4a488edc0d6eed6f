from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionType(str, Enum):
    SHORT_ANSWER = "shortAnswer"
    PARAGRAPH = "paragraph"
    MULTIPLE_CHOICE = "multipleChoice"
    CHECKBOXES = "checkboxes"
    DATE = "date"
    TIME = "time"
    LINEAR_SCALE = "linearScale"
    FILE_UPLOAD = "fileUpload"

    @property
    def is_choice(self) -> bool:
        return self in (QuestionType.MULTIPLE_CHOICE, QuestionType.CHECKBOXES)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self) -> dict:
        """Wire shape: camelCase keys, ISO timestamps, null options omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Question(_CamelModel):
    id: UUID
    type: QuestionType
    text: str
    options: tuple[str, ...] | None = None  # only meaningful for choice types
    is_required: bool
    responses: tuple[str, ...]

    @classmethod
    def new(
        cls,
        type: QuestionType,
        text: str,
        options: list[str] | None = None,
        is_required: bool = False,
    ) -> "Question":
        """Unsaved question with a fresh id and no collected responses."""
        return cls(
            id=uuid4(),
            type=type,
            text=text,
            options=options,
            is_required=is_required,
            responses=(),
        )


class Form(_CamelModel):
    id: UUID
    title: str
    description: str
    questions: tuple[Question, ...]
    created_at: datetime
    updated_at: datetime
    responses: int  # submission count
    is_published: bool

    @classmethod
    def draft(cls, title: str, description: str) -> "Form":
        """New unsaved form with a fresh id and both timestamps set to now."""
        now = _utcnow()
        return cls(
            id=uuid4(),
            title=title,
            description=description,
            questions=(),
            created_at=now,
            updated_at=now,
            responses=0,
            is_published=False,
        )


FormList = TypeAdapter(list[Form])


def forms_to_json(forms) -> list[dict]:
    return [form.to_json() for form in forms]


def forms_from_json(data) -> list[Form]:
    """Validate a decoded JSON array into forms. Raises pydantic.ValidationError."""
    return FormList.validate_python(data)


class CreateFormRequest(BaseModel):
    title: str
    description: str = ""


class AddQuestionRequest(BaseModel):
    text: str
    type: QuestionType = QuestionType.SHORT_ANSWER
    options: list[str] | None = None  # used for multipleChoice, checkboxes
    is_required: bool = False


class UpdateQuestionRequest(BaseModel):
    text: str
    type: QuestionType
    is_required: bool = False
    options: list[str] | None = None  # None keeps the current options


class AddOptionRequest(BaseModel):
    text: str = ""
