from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence


class Errors(Enum):
    GOOGLE_01 = "Credentials file '{}' not found"
    GOOGLE_02 = "Error reading credentials file"

    @property
    def code(self) -> str:
        return self.name

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConfigIssue:
    group: str
    config_name: str
    error: Errors
    args: tuple[Any, ...] = ()

    @property
    def message(self) -> str:
        return f"{self.error.code} - {self.error.message.format(*self.args)}"


class ResourceContext(Protocol):
    @property
    def resources_directory(self) -> str: ...

    def create_config_issue(
        self, group: str, config_name: str, error: Errors, *args: Any
    ) -> ConfigIssue: ...


@dataclass(frozen=True)
class StageContext:
    resources_directory: str

    def create_config_issue(
        self, group: str, config_name: str, error: Errors, *args: Any
    ) -> ConfigIssue:
        return ConfigIssue(group=group, config_name=config_name, error=error, args=args)


class CredentialsConfigError(RuntimeError):
    def __init__(self, issues: Sequence[ConfigIssue]) -> None:
        self.issues = list(issues)
        detail = "; ".join(issue.message for issue in self.issues) or "no credentials supplied"
        super().__init__(f"Invalid Google Cloud credentials configuration: {detail}")
