"""REST client for the remote forms API.

Each operation is a coroutine; the blocking requests call runs in a worker
thread so the event loop that owns coordinator state is never blocked.
"""

import asyncio
import logging
from typing import Protocol
from urllib.parse import urljoin

import requests
from pydantic import ValidationError

from formulary.config import get_settings
from formulary.exceptions import IntegrationError
from formulary.http_client import get_session
from formulary.models.forms import Form, forms_from_json

logger = logging.getLogger(__name__)


class FormsService(Protocol):
    async def list_forms(self) -> list[Form]: ...

    async def create_form(self, draft: Form) -> Form: ...

    async def update_form(self, form: Form) -> Form: ...

    async def delete_form(self, form: Form) -> None: ...


def _handle_response(resp: requests.Response) -> None:
    if not resp.ok:
        raise IntegrationError(f"Forms API error (HTTP {resp.status_code}): {resp.text[:500]}")


def _decode(resp: requests.Response):
    try:
        return resp.json()
    except ValueError as e:
        raise IntegrationError(f"Forms API returned invalid JSON: {e}") from e


class HTTPFormsClient:
    """FormsService backed by the shared requests session."""

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None):
        base_url = base_url or get_settings().api_base_url
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._session = session

    @property
    def session(self) -> requests.Session:
        return self._session or get_session()

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def _request(self, method: str, path: str, json: dict | None = None) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, json=json)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise IntegrationError(f"Forms API request failed: {e}") from e
        _handle_response(resp)
        return resp

    def _list_forms(self) -> list[Form]:
        resp = self._request("GET", "forms")
        try:
            return forms_from_json(_decode(resp))
        except ValidationError as e:
            raise IntegrationError(f"Forms API returned an unexpected form list: {e}") from e

    def _send_form(self, method: str, path: str, form: Form) -> Form:
        resp = self._request(method, path, json=form.to_json())
        try:
            return Form.model_validate(_decode(resp))
        except ValidationError as e:
            raise IntegrationError(f"Forms API returned an unexpected form: {e}") from e

    def _delete_form(self, form: Form) -> None:
        self._request("DELETE", f"forms/{form.id}")

    async def list_forms(self) -> list[Form]:
        return await asyncio.to_thread(self._list_forms)

    async def create_form(self, draft: Form) -> Form:
        return await asyncio.to_thread(self._send_form, "POST", "forms", draft)

    async def update_form(self, form: Form) -> Form:
        return await asyncio.to_thread(self._send_form, "PUT", f"forms/{form.id}", form)

    async def delete_form(self, form: Form) -> None:
        await asyncio.to_thread(self._delete_form, form)
