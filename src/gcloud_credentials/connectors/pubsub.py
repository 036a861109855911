from __future__ import annotations

from typing import Any

from googleapiclient.discovery import build

from gcloud_credentials.auth import CredentialsProvider
from gcloud_credentials.config import ResolverConfig
from gcloud_credentials.issues import CredentialsConfigError, ResourceContext
from gcloud_credentials.resolver import resolve_credentials


class PubSubConnector:
    def __init__(self, provider: CredentialsProvider, project_id: str) -> None:
        self.project_id = project_id
        self._service = build(
            "pubsub",
            "v1",
            credentials=provider.get_credentials(),
            cache_discovery=False,
        )

    @classmethod
    def from_config(
        cls, config: ResolverConfig, context: ResourceContext
    ) -> PubSubConnector:
        provider, issues = resolve_credentials(config, context)
        if provider is None:
            raise CredentialsConfigError(issues)
        return cls(provider, config.project_id)

    @property
    def project_path(self) -> str:
        return f"projects/{self.project_id}"

    def _qualify(self, collection: str, name: str) -> str:
        if name.startswith("projects/"):
            return name
        return f"{self.project_path}/{collection}/{name}"

    def _list_all(self, resource: Any, key: str, page_size: int) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page_token: str | None = None

        while True:
            kwargs: dict[str, Any] = {"project": self.project_path, "pageSize": page_size}
            if page_token:
                kwargs["pageToken"] = page_token

            response = resource.list(**kwargs).execute()
            items.extend(response.get(key, []))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        return items

    def list_topics(self, *, page_size: int = 100) -> list[dict[str, Any]]:
        return self._list_all(self._service.projects().topics(), "topics", page_size)

    def list_subscriptions(self, *, page_size: int = 100) -> list[dict[str, Any]]:
        return self._list_all(
            self._service.projects().subscriptions(), "subscriptions", page_size
        )

    def get_subscription(self, name: str) -> dict[str, Any]:
        subscription = self._qualify("subscriptions", name)
        return (
            self._service.projects()
            .subscriptions()
            .get(subscription=subscription)
            .execute()
        )
