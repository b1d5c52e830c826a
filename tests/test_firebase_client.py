import base64
import json

import pytest

from core.dao import firebase_client
from core.dao.firebase_client import decode_base64_credentials, init_firebase


def test_decode_base64_credentials():
    credentials = {"type": "service_account", "project_id": "locatarios"}
    encoded = base64.b64encode(json.dumps(credentials).encode("utf-8")).decode("utf-8")

    assert decode_base64_credentials(encoded) == credentials


def test_decode_base64_credentials_rejects_garbage():
    with pytest.raises(ValueError, match="Base64"):
        decode_base64_credentials("isto não é base64")


def test_init_firebase_requires_credentials(monkeypatch):
    monkeypatch.setattr(firebase_client, "_firebase_instances", {})
    monkeypatch.setenv("RAILWAY_ENVIRONMENT_NAME", "homolog")
    monkeypatch.delenv("FIREBASE_CREDENTIALS_HOMOLOG", raising=False)
    monkeypatch.delenv("FIREBASE_URL_HOMOLOG", raising=False)

    with pytest.raises(ValueError, match="Credenciais"):
        init_firebase()


def test_init_firebase_reuses_existing_app(monkeypatch):
    app = object()
    monkeypatch.setattr(firebase_client, "_firebase_instances", {"production": app})
    monkeypatch.setenv("RAILWAY_ENVIRONMENT_NAME", "production")

    assert init_firebase() is app
