from uuid import UUID

from fastapi import APIRouter, HTTPException

from formulary.coordinator import get_coordinator
from formulary.models.forms import (
    AddOptionRequest,
    AddQuestionRequest,
    CreateFormRequest,
    Form,
    UpdateQuestionRequest,
)
from formulary.models.state import FormState
from formulary.services import editing

router = APIRouter(prefix="/api/forms", tags=["forms"])


@router.get("/state")
async def get_state() -> FormState:
    return get_coordinator().state


@router.post("/refresh")
async def refresh_forms() -> FormState:
    coordinator = get_coordinator()
    await coordinator.fetch_forms()
    return coordinator.state


@router.post("")
async def create_form(request: CreateFormRequest) -> FormState:
    coordinator = get_coordinator()
    await coordinator.create_form(request.title, request.description)
    return coordinator.state


@router.delete("/error")
async def dismiss_error() -> FormState:
    coordinator = get_coordinator()
    coordinator.dismiss_error()
    return coordinator.state


@router.put("/{form_id}")
async def update_form(form_id: UUID, form: Form) -> FormState:
    if form.id != form_id:
        raise HTTPException(status_code=422, detail="Form id in body does not match the path.")
    coordinator = get_coordinator()
    await coordinator.update_form(form)
    return coordinator.state


@router.delete("/{form_id}")
async def delete_form(form_id: UUID) -> FormState:
    coordinator = get_coordinator()
    await coordinator.delete_form(coordinator.get_form(form_id))
    return coordinator.state


@router.post("/{form_id}/select")
async def select_form(form_id: UUID) -> FormState:
    coordinator = get_coordinator()
    coordinator.select_form(form_id)
    return coordinator.state


@router.post("/{form_id}/questions")
async def add_question(form_id: UUID, request: AddQuestionRequest) -> FormState:
    coordinator = get_coordinator()
    question = editing.new_question(request.type, request.text, request.options, request.is_required)
    await coordinator.update_form(editing.add_question(coordinator.get_form(form_id), question))
    return coordinator.state


@router.delete("/{form_id}/questions/{question_id}")
async def remove_question(form_id: UUID, question_id: UUID) -> FormState:
    coordinator = get_coordinator()
    await coordinator.update_form(editing.remove_question(coordinator.get_form(form_id), question_id))
    return coordinator.state


@router.put("/{form_id}/questions/{question_id}")
async def update_question(form_id: UUID, question_id: UUID, request: UpdateQuestionRequest) -> FormState:
    coordinator = get_coordinator()
    form = coordinator.get_form(form_id)
    question = editing.change_question_type(editing.get_question(form, question_id), request.type)
    changes = {"text": request.text, "is_required": request.is_required}
    if request.options is not None and request.type.is_choice:
        changes["options"] = tuple(request.options)
    await coordinator.update_form(editing.update_question(form, question.model_copy(update=changes)))
    return coordinator.state


@router.post("/{form_id}/questions/{question_id}/options")
async def add_option(form_id: UUID, question_id: UUID, request: AddOptionRequest) -> FormState:
    coordinator = get_coordinator()
    form = coordinator.get_form(form_id)
    question = editing.add_option(editing.get_question(form, question_id), request.text)
    await coordinator.update_form(editing.update_question(form, question))
    return coordinator.state
