"""Tests for appsimple.client.ApiClient using httpx.MockTransport (no server)."""

import argparse
import io
import json
import unittest
from contextlib import redirect_stderr

import httpx

from appsimple import cli
from appsimple.client import ApiClient, ApiClientError
from appsimple.core.errors import PermissionDeniedError
from appsimple.core.permissions import UserRole

NOW = "2026-01-01T00:00:00Z"


def _user_payload(username: str, role: str) -> dict:
    return {
        "uid": f"uid-{username}",
        "username": username,
        "email": f"{username}@appsimple.dev",
        "role": role,
        "is_active": True,
        "is_system": username == "admin",
        "created_at": NOW,
        "updated_at": NOW,
    }


class FakeApi:
    """Minimal stand-in for the server; records every request path."""

    def __init__(self, role: str = "Admin") -> None:
        self.role = role
        self.paths: list[str] = []
        self.delete_status = 204

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.paths.append(path)
        if path == "/api/v1/auth/login":
            creds = json.loads(request.content)
            if creds["password"] != "right":
                return httpx.Response(401, json={"error": "Invalid username or password."})
            return httpx.Response(200, json={"token": "tok", "username": creds["username"], "role": self.role})
        if request.headers.get("Authorization") != "Bearer tok" and path != "/api/v1/health":
            return httpx.Response(401, json={"error": "Not authenticated"})
        if path == "/api/v1/protected/me":
            return httpx.Response(200, json=_user_payload("admin" if self.role == "Admin" else "alice", self.role))
        if path == "/api/v1/admin/users" and request.method == "GET":
            return httpx.Response(200, json={"users": [_user_payload("admin", "Admin"), _user_payload("alice", "User")]})
        if path == "/api/v1/admin/users" and request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json=_user_payload(body["username"], "User"))
        if path.endswith("/role"):
            return httpx.Response(204)
        if request.method == "DELETE":
            return httpx.Response(self.delete_status, json={"error": "boom"})
        if path == "/api/v1/health":
            return httpx.Response(200, json={"status": "ok", "environment": "dev", "database": "connected"})
        return httpx.Response(404, json={"error": "not found"})


def _client(api: FakeApi) -> ApiClient:
    return ApiClient("http://testserver", transport=httpx.MockTransport(api))


class TestLogin(unittest.TestCase):
    def test_login_populates_session(self) -> None:
        with _client(FakeApi()) as client:
            self.assertTrue(client.login("admin", "right"))
            self.assertTrue(client.session.is_logged_in)
            self.assertEqual(client.session.role, UserRole.ADMIN)
            self.assertEqual(client.session.current_user.username, "admin")

    def test_bad_credentials(self) -> None:
        with _client(FakeApi()) as client:
            self.assertFalse(client.login("admin", "wrong"))
            self.assertFalse(client.session.is_logged_in)

    def test_logout(self) -> None:
        with _client(FakeApi()) as client:
            client.login("admin", "right")
            client.logout()
            self.assertFalse(client.session.is_logged_in)


class TestAdminCalls(unittest.TestCase):
    def test_admin_can_manage_users(self) -> None:
        with _client(FakeApi()) as client:
            client.login("admin", "right")
            self.assertEqual([u.username for u in client.list_users()], ["admin", "alice"])
            self.assertEqual(client.create_user("dave", "dave@appsimple.dev", "Secret123!").username, "dave")
            self.assertTrue(client.set_role("uid-alice", UserRole.ADMIN))
            self.assertTrue(client.delete_user("uid-alice"))

    def test_user_is_stopped_before_any_request(self) -> None:
        api = FakeApi(role="User")
        with _client(api) as client:
            client.login("alice", "right")
            sent = len(api.paths)
            with self.assertRaises(PermissionDeniedError):
                client.list_users()
            with self.assertRaises(PermissionDeniedError):
                client.delete_user("uid-admin")
            self.assertEqual(len(api.paths), sent)

    def test_logged_out_client_is_denied(self) -> None:
        with _client(FakeApi()) as client:
            with self.assertRaises(PermissionDeniedError):
                client.get_me()

    def test_server_error_on_delete_raises(self) -> None:
        api = FakeApi()
        api.delete_status = 500
        with _client(api) as client:
            client.login("admin", "right")
            with self.assertRaises(ApiClientError) as ctx:
                client.delete_user("uid-alice")
            self.assertEqual(ctx.exception.status_code, 500)

    def test_forbidden_delete_returns_false(self) -> None:
        api = FakeApi()
        api.delete_status = 403
        with _client(api) as client:
            client.login("admin", "right")
            self.assertFalse(client.delete_user("uid-admin"))


class TestHealth(unittest.TestCase):
    def test_health(self) -> None:
        with _client(FakeApi()) as client:
            health = client.get_health()
        self.assertEqual(health.database, "connected")

    def test_unreachable(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with ApiClient("http://testserver", transport=httpx.MockTransport(fail)) as client:
            self.assertIsNone(client.get_health())
            self.assertFalse(client.login("admin", "right"))


class FlakyApi(FakeApi):
    """FakeApi whose connection drops for the listed paths."""

    def __init__(self, drop: tuple[str, ...], **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.drop = drop

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path in self.drop:
            raise httpx.ConnectError("connection reset", request=request)
        return super().__call__(request)


class TestConnectionDrops(unittest.TestCase):
    def test_drop_between_login_and_profile(self) -> None:
        with _client(FlakyApi(drop=("/api/v1/protected/me",))) as client:
            self.assertFalse(client.login("admin", "right"))
            self.assertFalse(client.session.is_logged_in)

    def test_malformed_login_payload(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>gateway</html>")

        with ApiClient("http://testserver", transport=httpx.MockTransport(handler)) as client:
            self.assertFalse(client.login("admin", "right"))

    def test_reads_after_drop_return_empty(self) -> None:
        api = FlakyApi(drop=())
        with _client(api) as client:
            self.assertTrue(client.login("admin", "right"))
            api.drop = ("/api/v1/admin/users", "/api/v1/protected/me")
            self.assertEqual(client.list_users(), [])
            self.assertIsNone(client.get_me())

    def test_cli_reports_failed_login_without_traceback(self) -> None:
        args = argparse.Namespace(command="users", username="admin", password="right")
        with _client(FlakyApi(drop=("/api/v1/protected/me",))) as client, redirect_stderr(io.StringIO()):
            self.assertEqual(cli.run(args, client), 1)


if __name__ == "__main__":
    unittest.main()
