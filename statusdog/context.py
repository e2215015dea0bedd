# statusdog/context.py
"""Builds the objects every screen shares and hands them out as one context."""

from __future__ import annotations

from dataclasses import dataclass

import requests

from .api_client import AuthClient, ImageResolver, ListServiceClient
from .config import AppConfig
from .session import SessionController
from .state import SavedListCache, TempSelectionStore
from .storage import LocalStorage


@dataclass
class AppContext:
    config: AppConfig
    storage: LocalStorage
    session: SessionController
    lists_client: ListServiceClient
    auth_client: AuthClient
    images: ImageResolver
    temp_list: TempSelectionStore
    saved_lists: SavedListCache


def build_context(config: AppConfig, http: requests.Session | None = None) -> AppContext:
    """Wires storage, clients and stores. The stores are restored from storage before any screen uses them."""
    http = http or requests.Session()
    storage = LocalStorage(config.STORAGE_PATH)
    auth_client = AuthClient(config, http)
    session = SessionController(storage, auth_client)
    return AppContext(
        config=config,
        storage=storage,
        session=session,
        lists_client=ListServiceClient(config, lambda: session.token, http),
        auth_client=auth_client,
        images=ImageResolver(config, http),
        temp_list=TempSelectionStore.restore(storage),
        saved_lists=SavedListCache.restore(storage),
    )
