"""Question editing on a form being edited locally.

Every function returns a new model and leaves its argument untouched, so an
edited form can be discarded or handed to the coordinator for saving.
"""

from uuid import UUID

from formulary.exceptions import QuestionNotFoundError
from formulary.models.forms import Form, Question, QuestionType


def new_question(
    type: QuestionType,
    text: str,
    options: list[str] | None = None,
    is_required: bool = False,
) -> Question:
    """Build a question with a fresh id. Options are kept only for choice types."""
    if not type.is_choice or not options:
        options = None
    return Question.new(type, text, options, is_required)


def get_question(form: Form, question_id: UUID) -> Question:
    for question in form.questions:
        if question.id == question_id:
            return question
    raise QuestionNotFoundError(f"Question {question_id} not found in form {form.id}.")


def add_question(form: Form, question: Question) -> Form:
    return form.model_copy(update={"questions": (*form.questions, question)})


def update_question(form: Form, question: Question) -> Form:
    """Replace the question with the same id, keeping its position."""
    questions = tuple(question if q.id == question.id else q for q in form.questions)
    return form.model_copy(update={"questions": questions})


def remove_question(form: Form, question_id: UUID) -> Form:
    questions = tuple(q for q in form.questions if q.id != question_id)
    return form.model_copy(update={"questions": questions})


def add_option(question: Question, text: str = "") -> Question:
    if not question.type.is_choice:
        return question
    return question.model_copy(update={"options": (*(question.options or ()), text)})


def change_question_type(question: Question, type: QuestionType) -> Question:
    options = question.options if type.is_choice else None
    return question.model_copy(update={"type": type, "options": options})
