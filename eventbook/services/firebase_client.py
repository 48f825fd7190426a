"""
Firebase initialization and helpers
"""

from __future__ import annotations

import json
from typing import Any
import base64
import os

import firebase_admin
from firebase_admin import credentials, firestore

from eventbook.core.config import Settings


def load_credentials_info(settings: Settings) -> dict[str, Any] | None:
    """Read service account info from JSON, base64 JSON, or a file, in that order."""
    if settings.FIREBASE_CREDENTIALS_JSON:
        return json.loads(settings.FIREBASE_CREDENTIALS_JSON)
    if settings.FIREBASE_CREDENTIALS_B64:
        decoded = base64.b64decode(settings.FIREBASE_CREDENTIALS_B64).decode("utf-8")
        return json.loads(decoded)
    if settings.FIREBASE_CREDENTIALS_FILE and os.path.exists(settings.FIREBASE_CREDENTIALS_FILE):
        with open(settings.FIREBASE_CREDENTIALS_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: Settings):
    """Initialize the default Firebase app if needed and return a Firestore client.

    Callers cache the result; see StoreConnector.
    """
    if not firebase_admin._apps:
        info = load_credentials_info(settings)
        if not info:
            raise RuntimeError("Firebase credentials not provided. Set FIREBASE_CREDENTIALS_FILE, FIREBASE_CREDENTIALS_JSON, or FIREBASE_CREDENTIALS_B64")

        cred = credentials.Certificate(info)
        firebase_admin.initialize_app(cred)

    return firestore.client()
