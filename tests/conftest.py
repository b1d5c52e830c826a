"""
Pytest configuration and shared fixtures.

The repository talks to firebase_admin's db.Reference; tests inject an
in-memory reference with the same surface (get/child/push/update/delete).
"""

import itertools

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.controllers.health_controller import health_router
from core.controllers.locatarios_controller import locatarios_router
from core.dao.locatario_repository import LocatarioRepository
from core.services.locatario_service import LocatarioService
from core.utils.trace import trace_id_middleware

BASE_URL = "/api/locatarios"


class MemoryReference:
    """Minimal stand-in for firebase_admin.db.Reference over a dict."""

    def __init__(self, root=None, path=(), counter=None):
        self._root = root if root is not None else {}
        self._path = tuple(path)
        self._counter = counter if counter is not None else itertools.count(1)

    @property
    def key(self):
        return self._path[-1] if self._path else None

    def _node(self, create=False):
        node = self._root
        for part in self._path:
            if not isinstance(node, dict) or part not in node:
                if not create:
                    return None
                node[part] = {}
            node = node[part]
        return node

    def child(self, path):
        return MemoryReference(self._root, self._path + (path,), self._counter)

    def get(self, etag=False, shallow=False):
        node = self._node()
        if isinstance(node, dict):
            if not node:
                return None
            if shallow:
                return {key: True for key in node}
            return {key: dict(value) if isinstance(value, dict) else value for key, value in node.items()}
        return node

    def push(self, value=""):
        key = f"-Lk{next(self._counter):017d}"
        new_ref = self.child(key)
        new_ref.set(value)
        return new_ref

    def set(self, value):
        parent = self._root
        for part in self._path[:-1]:
            parent = parent.setdefault(part, {})
        parent[self._path[-1]] = {k: v for k, v in value.items() if v is not None}

    def update(self, value):
        node = self._node(create=True)
        for name, field in value.items():
            if field is None:
                node.pop(name, None)
            else:
                node[name] = field

    def delete(self):
        parent = self._root
        for part in self._path[:-1]:
            parent = parent.get(part, {})
        parent.pop(self._path[-1], None)


class FailingReference(MemoryReference):
    """Reference whose every call fails like an unreachable database."""

    def __init__(self, error):
        super().__init__()
        self._error = error

    def child(self, path):
        return self

    def get(self, etag=False, shallow=False):
        raise self._error

    def push(self, value=""):
        raise self._error


@pytest.fixture
def store():
    return {}


@pytest.fixture
def reference(store):
    return MemoryReference(store)


@pytest.fixture
def repository(reference):
    return LocatarioRepository(reference)


@pytest.fixture
def service(repository):
    return LocatarioService(repository)


def build_app(service):
    app = FastAPI()
    app.middleware("http")(trace_id_middleware)
    app.include_router(health_router)
    app.include_router(locatarios_router)
    app.state.locatario_service = service
    return app


@pytest.fixture
def client(service, monkeypatch):
    monkeypatch.delenv("API_ACCESS_TOKEN", raising=False)
    return TestClient(build_app(service), raise_server_exceptions=False)


@pytest.fixture
def valid_locatario():
    return {"cpf": "123456789", "nome": "AnaSilva", "idade": 30}
