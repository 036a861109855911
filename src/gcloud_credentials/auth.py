from __future__ import annotations

import json
from typing import IO, Callable, Sequence

import google.auth
from google.auth.credentials import Credentials
from google.oauth2.service_account import Credentials as ServiceAccountCredentials


def load_service_account_credentials(
    stream: IO[bytes], scopes: Sequence[str]
) -> Credentials:
    """Parse a service-account key from a byte stream.

    Raises ``ValueError`` for anything that is not a usable key document and
    lets ``OSError`` from the stream propagate.
    """
    try:
        info = json.load(stream)
    except RecursionError as exc:
        raise ValueError("Service account key is nested too deeply") from exc
    if not isinstance(info, dict):
        raise ValueError("Service account key must be a JSON object")

    creds: Credentials = ServiceAccountCredentials.from_service_account_info(
        info, scopes=list(scopes)
    )
    return creds


class CredentialsProvider:
    """Hands out credentials on demand to a Google Cloud client."""

    def __init__(self, loader: Callable[[], Credentials]) -> None:
        self._loader = loader
        self._credentials: Credentials | None = None

    @classmethod
    def fixed(cls, credentials: Credentials) -> CredentialsProvider:
        return cls(lambda: credentials)

    @classmethod
    def default(cls, scopes: Sequence[str]) -> CredentialsProvider:
        def _discover() -> Credentials:
            creds, _ = google.auth.default(scopes=list(scopes))
            return creds

        return cls(_discover)

    def get_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = self._loader()
        return self._credentials
