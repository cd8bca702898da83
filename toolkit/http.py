"""The single outbound call a handler makes, and parsing of its body.

Every failure at this boundary (transport error, non-2xx status, a body
that is not JSON or does not fit the expected upstream model) surfaces as
UpstreamFailure so handlers never see raw `requests` or pydantic errors.
"""
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

import pydantic
import requests

from toolkit.errors import UpstreamFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

Model = TypeVar("Model", bound=pydantic.BaseModel)

_local = threading.local()


def thread_session() -> requests.Session:
    """Return the requests Session owned by the calling thread."""
    session = getattr(_local, "session", None)
    if session is None:
        session = _local.session = requests.Session()
    return session


def get_json(
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET `url` with percent-encoded query `params` and return the decoded JSON."""
    return _request("GET", url, params=params, headers=headers, session=session, timeout=timeout)


def post_form(
    url: str,
    data: Mapping[str, str],
    *,
    auth: Optional[Tuple[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """POST a form-encoded body and return the decoded JSON."""
    return _request(
        "POST", url, data=data, auth=auth, headers=headers, session=session, timeout=timeout
    )


def parse(model: Type[Model], payload: Any, *, url: Optional[str] = None) -> Model:
    """Validate an upstream body against `model`."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise UpstreamFailure(
            f"Unexpected response shape from {url or 'upstream'}: {exc.error_count()} error(s)",
            url=url,
        ) from exc


def _request(method: str, url: str, *, session: Optional[requests.Session], **kwargs: Any) -> Any:
    client = session or requests
    logger.debug("%s %s params=%s", method, url, kwargs.get("params"))
    try:
        response = client.request(method, url, **kwargs)
    except requests.RequestException as exc:
        raise UpstreamFailure(f"{method} {url} failed: {exc}", url=url) from exc

    if not response.ok:
        raise UpstreamFailure(
            f"{method} {url} returned status {response.status_code}",
            status=response.status_code,
            url=url,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamFailure(f"{method} {url} returned a non-JSON body", url=url) from exc


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}", "Accept": "application/json"}
