"""
Integration tests for application startup.

These tests start the real server in a subprocess and talk to it over HTTP.
"""

import os
import subprocess
import sys
import time

import httpx
import pytest

PORT = 9011
BASE_URL = f"http://127.0.0.1:{PORT}"


def wait_until_ready(process, log_path, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if process.poll() is not None:
            pytest.fail(f"App failed to start.\nOutput: {log_path.read_text()}")
        try:
            httpx.get(f"{BASE_URL}/user", timeout=1.0)
            return
        except httpx.TransportError:
            time.sleep(0.2)
    pytest.fail("App did not become ready in time")


@pytest.fixture
def running_app(tmp_path):
    (tmp_path / "application.yml").write_text(
        f"""
server:
  port: {PORT}
database:
  url: sqlite+aiosqlite:///{tmp_path / 'users.db'}
logging:
  colored: false
"""
    )

    env = {k: v for k, v in os.environ.items() if not k.startswith("USERDESK_")}
    log_path = tmp_path / "server.log"
    with open(log_path, "w") as log_file:
        process = subprocess.Popen(
            [sys.executable, "-m", "userdesk"],
            cwd=tmp_path,
            env=env,
            stdout=log_file,
            stderr=subprocess.STDOUT,
        )

    try:
        wait_until_ready(process, log_path)
        yield process
    finally:
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()


def test_user_lifecycle_over_http(running_app):
    """Create, read, update and delete a user against a live server."""
    created = httpx.post(
        f"{BASE_URL}/user",
        json={"name": "Alice", "email": "alice@example.com", "password": "s3cretpass"},
        timeout=5.0,
    )
    assert created.status_code == 201
    user = created.json()
    assert "password" not in user

    fetched = httpx.get(f"{BASE_URL}/user/{user['id']}", timeout=5.0)
    assert fetched.status_code == 200
    assert fetched.json()["email"] == "alice@example.com"

    patched = httpx.patch(
        f"{BASE_URL}/user/{user['id']}", json={"name": "Alicia"}, timeout=5.0
    )
    assert patched.status_code == 200
    assert patched.json()["name"] == "Alicia"

    deleted = httpx.delete(f"{BASE_URL}/user/{user['id']}", timeout=5.0)
    assert deleted.status_code == 204

    missing = httpx.get(f"{BASE_URL}/user/{user['id']}", timeout=5.0)
    assert missing.status_code == 404


def test_invalid_payload_over_http(running_app):
    response = httpx.post(
        f"{BASE_URL}/user",
        json={"name": "Bob", "email": "not-an-email", "password": "short"},
        timeout=5.0,
    )

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["email", "password"]
