"""OAuth2 client-credentials tokens and the store that caches them."""
import abc
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests
from pydantic import BaseModel

from toolkit import http

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "product.compact"


@dataclass(frozen=True)
class Credential:
    access_token: str
    expires_at: Optional[float] = None  # clock reading; None means no known expiry


class TokenResponse(BaseModel):
    access_token: str
    expires_in: Optional[int] = None
    token_type: Optional[str] = None


class CredentialStore(abc.ABC):
    """Holds at most one credential; setting a new one replaces the old."""

    @abc.abstractmethod
    def get(self) -> Optional[Credential]:
        ...

    @abc.abstractmethod
    def set(self, credential: Credential) -> None:
        ...

    @abc.abstractmethod
    def is_expired(self) -> bool:
        """True when there is no credential or it is past its expiry."""

    def now(self) -> float:
        """Clock used to stamp expiry times."""
        return time.monotonic()


class MemoryCredentialStore(CredentialStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic, leeway: float = 30.0) -> None:
        self._clock = clock
        self._leeway = leeway
        self._lock = threading.Lock()
        self._credential: Optional[Credential] = None

    def get(self) -> Optional[Credential]:
        with self._lock:
            return self._credential

    def set(self, credential: Credential) -> None:
        with self._lock:
            self._credential = credential

    def is_expired(self) -> bool:
        with self._lock:
            credential = self._credential
        if credential is None:
            return True
        if credential.expires_at is None:
            return False
        return self._clock() >= credential.expires_at - self._leeway

    def now(self) -> float:
        return self._clock()


def client_credentials_grant(
    store: CredentialStore,
    token_url: str,
    client_id: str,
    client_secret: str,
    scope: str = DEFAULT_SCOPE,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = http.DEFAULT_TIMEOUT,
) -> Credential:
    """Request a new access token and overwrite whatever the store held."""
    body = http.post_form(
        token_url,
        {"grant_type": "client_credentials", "scope": scope},
        auth=(client_id, client_secret),
        session=session,
        timeout=timeout,
    )
    token = http.parse(TokenResponse, body, url=token_url)
    expires_at = store.now() + token.expires_in if token.expires_in else None
    credential = Credential(access_token=token.access_token, expires_at=expires_at)
    store.set(credential)
    logger.info("Acquired access token from %s (expires_in=%s)", token_url, token.expires_in)
    return credential


def bearer_token(
    store: CredentialStore,
    token_url: str,
    client_id: str,
    client_secret: str,
    scope: str = DEFAULT_SCOPE,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = http.DEFAULT_TIMEOUT,
) -> str:
    """Return the cached token, fetching a fresh one when it is missing or expired."""
    credential = store.get()
    if credential is None or store.is_expired():
        credential = client_credentials_grant(
            store, token_url, client_id, client_secret, scope, session=session, timeout=timeout
        )
    return credential.access_token
