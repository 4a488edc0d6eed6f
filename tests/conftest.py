import pytest
from unittest.mock import MagicMock

from formulary.exceptions import IntegrationError
from formulary.models.forms import Form
from formulary.services.mirror import MirrorStore


# --- Canned API payloads ---

QUESTION_TEXT = {
    "id": "0b5c9b0e-2f6d-4c36-9a57-5d1f4a3c2e10",
    "type": "shortAnswer",
    "text": "What is your name?",
    "isRequired": True,
    "responses": ["Alice", "Bob"],
}

QUESTION_CHOICE = {
    "id": "8e2f1a44-6b0d-4b8e-b1c2-7c9d0e1f2a3b",
    "type": "multipleChoice",
    "text": "Favorite color?",
    "options": ["Red", "Blue", "Green"],
    "isRequired": False,
    "responses": [],
}

FORM_API = {
    "id": "3f1d7c2a-9e4b-4a5c-8d6e-1b2c3d4e5f60",
    "title": "Team survey",
    "description": "Quarterly check-in",
    "questions": [QUESTION_TEXT, QUESTION_CHOICE],
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-02T12:30:00Z",
    "responses": 2,
    "isPublished": True,
}

FORM_API_EMPTY = {
    "id": "a7b8c9d0-1e2f-4a3b-9c4d-5e6f7a8b9c0d",
    "title": "Blank",
    "description": "",
    "questions": [],
    "createdAt": "2025-02-01T08:00:00Z",
    "updatedAt": "2025-02-01T08:00:00Z",
    "responses": 0,
    "isPublished": False,
}


class FakeFormsService:
    """In-memory FormsService: echoes forms back, or raises ``error`` when set."""

    def __init__(self, forms: list[Form] | None = None):
        self.forms = forms or []
        self.error: IntegrationError | None = None
        self.calls: list[tuple[str, object]] = []

    def _check(self, name: str, arg=None):
        self.calls.append((name, arg))
        if self.error is not None:
            raise self.error

    async def list_forms(self) -> list[Form]:
        self._check("list_forms")
        return list(self.forms)

    async def create_form(self, draft: Form) -> Form:
        self._check("create_form", draft)
        return draft.model_copy(update={"title": draft.title + " (server)"})

    async def update_form(self, form: Form) -> Form:
        self._check("update_form", form)
        return form

    async def delete_form(self, form: Form) -> None:
        self._check("delete_form", form)


@pytest.fixture
def api_form() -> Form:
    return Form.model_validate(FORM_API)


@pytest.fixture
def empty_form() -> Form:
    return Form.model_validate(FORM_API_EMPTY)


@pytest.fixture
def fake_service() -> FakeFormsService:
    return FakeFormsService()


@pytest.fixture
def mirror(tmp_path) -> MirrorStore:
    return MirrorStore(tmp_path / "forms_cache.json")


@pytest.fixture
def mock_session():
    """A requests.Session stand-in for HTTPFormsClient."""
    return MagicMock()
