"""
End-to-end integration tests for the animation resolution HTTP service.

These tests start the actual HTTP service in a subprocess and exercise the
paths that never leave the process (health, request validation).

Run with: pytest tests/integration/animation_resolution/ -v
"""

from __future__ import annotations

import os
import subprocess
import sys
import time

import httpx
import pytest

PORT = 8097


@pytest.fixture(scope="module")
def animation_service():
    """Start the animation resolution service for testing."""
    env = {k: v for k, v in os.environ.items() if "ROBLOSECURITY" not in k.upper()}
    process = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "src.services.animation_resolution",
            "--port",
            str(PORT),
            "--log-level",
            "warning",
        ],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )

    # Wait for service to be ready
    max_retries = 30
    for _ in range(max_retries):
        try:
            response = httpx.get(f"http://localhost:{PORT}/health", timeout=1.0)
            if response.status_code == 200:
                break
        except httpx.ConnectError:
            pass
        time.sleep(0.5)
    else:
        process.kill()
        pytest.fail("Animation resolution service failed to start")

    yield f"http://localhost:{PORT}"

    # Cleanup
    process.terminate()
    try:
        process.wait(timeout=5)
    except subprocess.TimeoutExpired:
        process.kill()


class TestAnimationResolutionE2E:
    """End-to-end tests for the running service."""

    def test_health_check(self, animation_service: str) -> None:
        response = httpx.get(f"{animation_service}/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_missing_credential_rejected(self, animation_service: str) -> None:
        response = httpx.post(
            f"{animation_service}/api/resolve",
            json={"catalogUrl": "https://www.roblox.com/catalog/987654321/Emote"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "missing_credential"

    def test_missing_asset_id_rejected(self, animation_service: str) -> None:
        response = httpx.post(
            f"{animation_service}/api/resolve",
            json={"catalogUrl": "https://www.roblox.com/catalog/"},
            headers={"X-Roblox-Security": "integration-test-cookie"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "missing_asset_id"
        assert "integration-test-cookie" not in response.text
