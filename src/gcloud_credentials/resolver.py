from __future__ import annotations

import io
import logging
import os
from typing import IO

from google.auth.credentials import Credentials

from gcloud_credentials.auth import CredentialsProvider, load_service_account_credentials
from gcloud_credentials.config import (
    CONF_CREDENTIALS_CREDENTIALS_PROVIDER,
    CredentialsProviderType,
    ResolverConfig,
)
from gcloud_credentials.issues import ConfigIssue, Errors, ResourceContext

logger = logging.getLogger(__name__)

CREDENTIALS_GROUP = "CREDENTIALS"


def resolve_credentials_path(config: ResolverConfig, context: ResourceContext) -> str:
    if os.path.isabs(config.path):
        return config.path
    return os.path.join(context.resources_directory, config.path)


def _open_credentials_stream(
    config: ResolverConfig, context: ResourceContext, issues: list[ConfigIssue]
) -> IO[bytes] | None:
    if config.credentials_provider is CredentialsProviderType.FILE_PATH:
        credentials_path = resolve_credentials_path(config, context)
        if not os.path.isfile(credentials_path):
            logger.error("Credentials file '%s' not found", credentials_path)
            issues.append(
                context.create_config_issue(
                    CREDENTIALS_GROUP,
                    CONF_CREDENTIALS_CREDENTIALS_PROVIDER,
                    Errors.GOOGLE_01,
                    credentials_path,
                )
            )
            return None
        return open(credentials_path, "rb")

    if (
        config.credentials_provider is CredentialsProviderType.INLINE_CONTENT
        and config.credentials_file_content
    ):
        return io.BytesIO(config.credentials_file_content.encode("utf-8"))

    return None


def _load_credentials(
    config: ResolverConfig, context: ResourceContext, issues: list[ConfigIssue]
) -> Credentials | None:
    try:
        stream = _open_credentials_stream(config, context, issues)
        if stream is None:
            return None
        with stream:
            return load_service_account_credentials(stream, config.scopes)
    except (OSError, ValueError):
        logger.error(Errors.GOOGLE_02.message, exc_info=True)
        issues.append(
            context.create_config_issue(
                CREDENTIALS_GROUP,
                CONF_CREDENTIALS_CREDENTIALS_PROVIDER,
                Errors.GOOGLE_02,
            )
        )
        return None


def get_credentials_provider(
    config: ResolverConfig, context: ResourceContext, issues: list[ConfigIssue]
) -> CredentialsProvider | None:
    """Build a credentials provider for ``config``, appending any problems to ``issues``.

    Returns ``None`` when the configured credentials could not be loaded, or
    when inline content was selected but left empty.
    """
    if config.credentials_provider is CredentialsProviderType.DEFAULT:
        return CredentialsProvider.default(config.scopes)

    credentials = _load_credentials(config, context, issues)
    if credentials is None:
        return None
    return CredentialsProvider.fixed(credentials)


def resolve_credentials(
    config: ResolverConfig, context: ResourceContext
) -> tuple[CredentialsProvider | None, list[ConfigIssue]]:
    issues: list[ConfigIssue] = []
    provider = get_credentials_provider(config, context, issues)
    return provider, issues
