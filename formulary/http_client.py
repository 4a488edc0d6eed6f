"""Shared HTTP session for the forms API."""

import requests
from requests.adapters import HTTPAdapter

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session that makes exactly one attempt per request.

    Connection pooling is reused across calls; retries are disabled so every
    failure reaches the caller on the first attempt.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"Accept": "application/json"})
        adapter = HTTPAdapter(max_retries=0)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)
    return _session
