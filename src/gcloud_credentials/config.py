from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Mapping

from dotenv import load_dotenv

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
CONF_CREDENTIALS_CREDENTIALS_PROVIDER = "conf.credentials.credentialsProvider"


class CredentialsProviderType(str, Enum):
    DEFAULT = "DEFAULT_PROVIDER"
    FILE_PATH = "JSON_PROVIDER"
    INLINE_CONTENT = "JSON"

    @classmethod
    def parse(cls, value: str | CredentialsProviderType) -> CredentialsProviderType:
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for member in cls:
            if text in (member.name, member.value):
                return member
        raise ValueError(f"Unsupported credentials provider: {value!r}")


def _parse_scopes(value: str | None) -> tuple[str, ...]:
    if not value:
        return (CLOUD_PLATFORM_SCOPE,)
    scopes = tuple(item.strip() for item in value.split(",") if item.strip())
    return scopes or (CLOUD_PLATFORM_SCOPE,)


@dataclass(frozen=True)
class ResolverConfig:
    project_id: str
    credentials_provider: CredentialsProviderType = CredentialsProviderType.DEFAULT
    path: str = ""
    credentials_file_content: str = field(default="", repr=False)
    scopes: tuple[str, ...] = (CLOUD_PLATFORM_SCOPE,)

    def __post_init__(self) -> None:
        # Frozen, so coerced values go through object.__setattr__.
        object.__setattr__(
            self,
            "credentials_provider",
            CredentialsProviderType.parse(self.credentials_provider),
        )
        object.__setattr__(self, "scopes", tuple(self.scopes))

        if not self.project_id.strip():
            raise ValueError("Project id is required")
        if self.credentials_provider is CredentialsProviderType.FILE_PATH and not self.path.strip():
            raise ValueError("Credentials file path is required for JSON_PROVIDER")


@dataclass(frozen=True)
class Settings:
    credentials: ResolverConfig
    resources_directory: str


def load_config(environ: Mapping[str, str]) -> ResolverConfig:
    project_id = (environ.get("GOOGLE_CLOUD_PROJECT") or "").strip()
    if not project_id:
        raise ValueError("Missing project id. Set GOOGLE_CLOUD_PROJECT.")

    return ResolverConfig(
        project_id=project_id,
        credentials_provider=CredentialsProviderType.parse(
            environ.get("GOOGLE_CREDENTIALS_PROVIDER") or CredentialsProviderType.DEFAULT
        ),
        path=environ.get("GOOGLE_CREDENTIALS_PATH") or "",
        credentials_file_content=environ.get("GOOGLE_CREDENTIALS_FILE_CONTENT") or "",
        scopes=_parse_scopes(environ.get("GOOGLE_CREDENTIALS_SCOPES")),
    )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        credentials=load_config(os.environ),
        resources_directory=os.getenv("RESOURCES_DIRECTORY") or os.getcwd(),
    )
