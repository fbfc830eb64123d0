"""boto3-backed CloudWatch Logs listing adapter."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import ClientFactoryError, RemoteTransportError
from .cursor import ListingPage

logger = logging.getLogger(__name__)

SERVICE_NAME = "logs"


class Boto3LogGroupLister:
    """Adapts ``describe_log_groups`` to the ``(prefix, token) -> page`` contract."""

    def __init__(self, client: Any, page_size: int | None = None) -> None:
        self._client = client
        self._page_size = page_size

    def list_log_groups(self, name_prefix: str | None, token: str | None) -> ListingPage:
        kwargs: dict[str, Any] = {}
        if name_prefix:
            kwargs["logGroupNamePrefix"] = name_prefix
        if token:
            kwargs["nextToken"] = token
        if self._page_size:
            kwargs["limit"] = self._page_size
        logger.debug("describe_log_groups %s", kwargs)
        try:
            response = self._client.describe_log_groups(**kwargs)
        except (BotoCoreError, ClientError) as exc:
            raise RemoteTransportError(f"describe_log_groups failed: {exc}") from exc
        return ListingPage(
            items=response.get("logGroups") or [],
            next_token=response.get("nextToken"),
        )


class ClientFactory:
    """Build and cache one ``logs`` client per profile.

    Used from the main loop only; fetch threads receive a finished lister.
    """

    def __init__(self, region: str | None = None, session_factory: Any = boto3.session.Session) -> None:
        self.region = region
        self._session_factory = session_factory
        self._clients: dict[str, Any] = {}

    def new_client(self, profile_name: str) -> Any:
        cached = self._clients.get(profile_name)
        if cached is not None:
            return cached
        try:
            session = self._session_factory(profile_name=profile_name, region_name=self.region)
            client = session.client(SERVICE_NAME)
        except BotoCoreError as exc:
            raise ClientFactoryError(f"could not create client for profile {profile_name!r}: {exc}") from exc
        self._clients[profile_name] = client
        return client

    def new_lister(self, profile_name: str) -> Boto3LogGroupLister:
        return Boto3LogGroupLister(self.new_client(profile_name))
