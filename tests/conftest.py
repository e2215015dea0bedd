"""
Shared fixtures: an isolated configuration, local storage on tmp_path and an in-memory backend
that stands in for the requests.Session used by the clients.
"""

import itertools
import json

import pytest
import requests

from statusdog.config import AUTH_HEADER, AppConfig
from statusdog.context import build_context
from statusdog.handlers import AppHandlers
from statusdog.storage import LocalStorage

ORIGIN = "http://backend.test"
IMAGE_BASE = "https://http.dog"
PLACEHOLDER = "https://via.placeholder.com/150"


def make_response(status=200, body=None, url=ORIGIN):
    response = requests.Response()
    response.status_code = status
    response.url = url
    if body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


class FakeBackend:
    """Implements the list backend's REST contract in memory."""

    def __init__(self, origin=ORIGIN):
        self.origin = origin
        self.users = {}
        self.tokens = {}
        self.lists = {}
        self.calls = []
        self.missing_images = set()
        self.fail_next = None
        self._ids = itertools.count(1)

    def add_user(self, name, email, password):
        self.users[email] = {"name": name, "password": password}

    def add_list(self, email, name, codes, image_links=None):
        list_id = f"list{next(self._ids)}"
        doc = {"_id": list_id, "name": name, "codes": list(codes),
               "createdAt": "2026-10-18T09:30:00.000Z", "user": email}
        if image_links is not None:
            doc["imageLinks"] = list(image_links)
        self.lists[list_id] = doc
        return list_id

    def token_for(self, email):
        token = f"token-{next(self._ids)}"
        self.tokens[token] = email
        return token

    # --- requests.Session surface ---

    def request(self, method, url, headers=None, json=None, **kwargs):
        self.calls.append((method, url, dict(headers or {}), json))
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error
        path = url[len(self.origin):]

        if method == "POST" and path == "/api/users/register":
            if json["email"] in self.users:
                return make_response(400, {"msg": "User already exists"}, url)
            self.add_user(json["name"], json["email"], json["password"])
            return make_response(200, {"msg": "User registered"}, url)

        if method == "POST" and path == "/api/users/login":
            user = self.users.get(json["email"])
            if user is None or user["password"] != json["password"]:
                return make_response(400, {"msg": "Invalid credentials"}, url)
            return make_response(200, {"token": self.token_for(json["email"])}, url)

        email = self.tokens.get((headers or {}).get(AUTH_HEADER))
        if email is None:
            return make_response(401, {"msg": "Token is not valid"}, url)

        if method == "GET" and path == "/api/lists/getList":
            owned = [doc for doc in self.lists.values() if doc["user"] == email]
            return make_response(200, {"lists": owned}, url)

        if method == "POST" and path == "/api/lists/saveList":
            list_id = self.add_list(email, json["name"], json["codes"])
            return make_response(201, self.lists[list_id], url)

        parts = path.split("/")  # ['', 'api', 'lists', id, ...]
        list_id = parts[3] if len(parts) > 3 else None
        doc = self.lists.get(list_id)
        if doc is None or doc["user"] != email:
            return make_response(404, {"msg": "List not found"}, url)

        if method == "DELETE" and len(parts) == 4:
            del self.lists[list_id]
            return make_response(200, {"msg": "List removed"}, url)

        if method == "PUT" and parts[4:] == ["deleteItem"]:
            doc["codes"] = [c for c in doc["codes"] if c != json["code"]]
            return make_response(200, doc, url)

        return make_response(404, {"msg": "Not found"}, url)

    def head(self, url, **kwargs):
        self.calls.append(("HEAD", url, {}, None))
        code = url.rsplit("/", 1)[-1].split(".")[0]
        return make_response(404 if code in self.missing_images else 200, None, url)

    def get(self, url, **kwargs):
        return make_response(200, {"message": "Welcome"}, url)


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("STATUSDOG_IMAGE_BASE_URL", IMAGE_BASE)
    monkeypatch.setenv("STATUSDOG_PLACEHOLDER_IMAGE", PLACEHOLDER)
    monkeypatch.setenv("STATUSDOG_LOG_DIR", str(tmp_path / "logs"))
    return AppConfig(["--api", ORIGIN, "--storage", str(tmp_path / "local_storage.json")])


@pytest.fixture
def storage(config):
    return LocalStorage(config.STORAGE_PATH)


@pytest.fixture
def backend():
    fake = FakeBackend()
    fake.add_user("Ada", "ada@example.com", "secret")
    return fake


@pytest.fixture
def ctx(config, backend):
    return build_context(config, http=backend)


@pytest.fixture
def handlers(ctx):
    return AppHandlers(ctx)


@pytest.fixture
def logged_in(ctx):
    ctx.session.login("ada@example.com", "secret")
    return ctx
