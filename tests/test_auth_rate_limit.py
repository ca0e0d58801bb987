import pytest

from backoffice.application.auth_rate_limit import (
    LOGIN_MAX_FAILURES,
    SlidingWindowLimiter,
    login_limiter,
)
from tests.conftest import SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD


@pytest.fixture(autouse=True)
def clear_rate_limiter():
    login_limiter.clear()
    yield
    login_limiter.clear()


def test_limiter_window_expires() -> None:
    limiter = SlidingWindowLimiter(max_failures=2, window_seconds=10)

    limiter.record_failure("key", now=100.0)
    limiter.record_failure("key", now=101.0)

    assert limiter.is_limited("key", now=105.0)
    assert not limiter.is_limited("key", now=112.0)


def test_retry_after_counts_down_to_oldest_failure() -> None:
    limiter = SlidingWindowLimiter(max_failures=1, window_seconds=60)

    limiter.record_failure("key", now=0.0)

    assert limiter.retry_after("key", now=15.0) == 45
    assert limiter.retry_after("other", now=15.0) == 0


async def test_login_returns_bearer_token(client) -> None:
    response = await client.post(
        "/auth/login",
        json={"userId": SUPER_ADMIN_EMAIL, "password": SUPER_ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0

    me = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["userId"] == SUPER_ADMIN_EMAIL


async def test_wrong_password_is_unauthorized(client) -> None:
    response = await client.post(
        "/auth/login", json={"userId": SUPER_ADMIN_EMAIL, "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_ERROR"


async def test_login_rate_limit_exceeded(client) -> None:
    payload = {"userId": SUPER_ADMIN_EMAIL, "password": "wrong"}
    for _ in range(LOGIN_MAX_FAILURES):
        response = await client.post("/auth/login", json=payload)
        assert response.status_code == 401

    response = await client.post("/auth/login", json=payload)

    assert response.status_code == 429
    error = response.json()["error"]
    assert error["code"] == "RATE_LIMITED"
    assert error["details"]["retry_after"] > 0


async def test_successful_login_resets_counter(client) -> None:
    bad = {"userId": SUPER_ADMIN_EMAIL, "password": "wrong"}
    for _ in range(LOGIN_MAX_FAILURES - 1):
        await client.post("/auth/login", json=bad)

    ok = await client.post(
        "/auth/login", json={"userId": SUPER_ADMIN_EMAIL, "password": SUPER_ADMIN_PASSWORD}
    )
    assert ok.status_code == 200

    for _ in range(LOGIN_MAX_FAILURES - 1):
        response = await client.post("/auth/login", json=bad)
        assert response.status_code == 401


async def test_login_body_is_validated(client) -> None:
    response = await client.post("/auth/login", json={"userId": ""})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
