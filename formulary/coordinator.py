"""Form coordinator: owns the authoritative form list and current selection.

All state changes happen in the coroutines below, on the event loop that
awaits them. Network calls are not sequenced: if two intents overlap, the
response that arrives last writes last.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from uuid import UUID

from formulary.exceptions import FormNotFoundError, IntegrationError
from formulary.models.forms import Form
from formulary.models.state import FormState
from formulary.services.forms_client import FormsService, HTTPFormsClient
from formulary.services.mirror import MirrorStore, get_mirror_store
from formulary.state import StateStore

logger = logging.getLogger(__name__)


class FormCoordinator:
    def __init__(self, service: FormsService, mirror: MirrorStore):
        self.service = service
        self.mirror = mirror
        self.store = StateStore(FormState(forms=mirror.load()))

    @property
    def state(self) -> FormState:
        return self.store.snapshot

    def _fail(self, action: str, error: IntegrationError, **changes) -> None:
        logger.warning("%s failed: %s", action, error)
        self.store.update(error_message=str(error), **changes)

    def _persist(self) -> None:
        self.mirror.save(self.state.forms)

    async def fetch_forms(self) -> None:
        self.store.update(is_loading=True, error_message=None)
        try:
            forms = await self.service.list_forms()
        except IntegrationError as e:
            self._fail("fetch_forms", e, is_loading=False)
            return
        self.store.update(forms=forms, is_loading=False)
        self._persist()

    async def create_form(self, title: str, description: str) -> None:
        draft = Form.draft(title, description)
        try:
            created = await self.service.create_form(draft)
        except IntegrationError as e:
            self._fail("create_form", e)
            return
        self.store.update(forms=[*self.state.forms, created], current_form=created)
        self._persist()

    async def update_form(self, form: Form) -> None:
        outgoing = form.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        try:
            updated = await self.service.update_form(outgoing)
        except IntegrationError as e:
            self._fail("update_form", e)
            return
        forms = list(self.state.forms)
        for i, existing in enumerate(forms):
            if existing.id == updated.id:
                forms[i] = updated
                break
        self.store.update(forms=forms, current_form=updated)
        self._persist()

    async def delete_form(self, form: Form) -> None:
        try:
            await self.service.delete_form(form)
        except IntegrationError as e:
            self._fail("delete_form", e)
            return
        changes = {"forms": [f for f in self.state.forms if f.id != form.id]}
        current = self.state.current_form
        if current is not None and current.id == form.id:
            changes["current_form"] = None
        self.store.update(**changes)
        self._persist()

    def get_form(self, form_id: UUID) -> Form:
        for form in self.state.forms:
            if form.id == form_id:
                return form
        raise FormNotFoundError(f"Form {form_id} not found.")

    def select_form(self, form_id: UUID | None) -> None:
        if form_id is None:
            self.store.update(current_form=None)
            return
        self.store.update(current_form=self.get_form(form_id))

    def dismiss_error(self) -> None:
        self.store.update(error_message=None)


@lru_cache
def get_coordinator() -> FormCoordinator:
    return FormCoordinator(HTTPFormsClient(), get_mirror_store())
