"""
webhook_gateway.registry.factory

Build the configured registry backend.

Responsibilities:
- Select the backend from settings.
- Turn client construction failures into `ConfigurationError` so they abort startup.
"""

from __future__ import annotations

from google.auth.exceptions import DefaultCredentialsError
from google.cloud import firestore
from sqlalchemy.exc import ArgumentError

from webhook_gateway.db.session import create_engine
from webhook_gateway.exceptions import ConfigurationError
from webhook_gateway.registry.base import UserRegistry
from webhook_gateway.registry.firestore import FirestoreUserRegistry
from webhook_gateway.registry.sql import SqlUserRegistry
from webhook_gateway.settings import Settings


def create_registry(settings: Settings) -> UserRegistry:
    if settings.registry_backend == "firestore":
        if not settings.firestore_project_id:
            raise ConfigurationError("Firestore registry requires a project id (PROJECT_ID)")
        try:
            client = firestore.AsyncClient(project=settings.firestore_project_id)
        except DefaultCredentialsError as e:
            raise ConfigurationError(f"Cannot authenticate to Firestore: {e}") from e
        return FirestoreUserRegistry(client, collection=settings.firestore_collection)

    try:
        engine = create_engine(settings)
    except ArgumentError as e:
        raise ConfigurationError(f"Invalid database URL: {e}") from e
    return SqlUserRegistry(engine)
