"""Tests for the fixed-window rate limiter."""

import pytest

from hr_portal.config import get_settings
from hr_portal.core.rate_limit import FixedWindowLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestFixedWindowLimiter:
    """Unit tests for window counting."""

    def test_allows_up_to_limit(self):
        limiter = FixedWindowLimiter("test", limit=3, window=60, clock=FakeClock())
        results = [limiter.check("1.2.3.4") for _ in range(4)]
        assert [r.allowed for r in results] == [True, True, True, False]
        assert results[0].remaining == 2
        assert results[3].retry_after == 61

    def test_window_resets(self):
        clock = FakeClock()
        limiter = FixedWindowLimiter("test", limit=1, window=60, clock=clock)
        assert limiter.check("a").allowed
        assert not limiter.check("a").allowed

        clock.now += 60
        assert limiter.check("a").allowed

    def test_keys_are_independent(self):
        limiter = FixedWindowLimiter("test", limit=1, window=60, clock=FakeClock())
        assert limiter.check("a").allowed
        assert limiter.check("b").allowed
        assert not limiter.check("a").allowed

    def test_reset(self):
        limiter = FixedWindowLimiter("test", limit=1, window=60, clock=FakeClock())
        limiter.check("a")
        limiter.reset("a")
        assert limiter.check("a").allowed

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            FixedWindowLimiter("test", limit=0, window=60)
        with pytest.raises(ValueError):
            FixedWindowLimiter("test", limit=1, window=0)


class TestEndpointLimits:
    """Limits applied to the sensitive auth endpoints."""

    def test_reset_password_limited_after_five_attempts(self, client, primary_admin):
        payload = {"answer": "guess", "new_password": "password456"}
        statuses = [client.post("/auth/reset-admin-password", json=payload).status_code for _ in range(6)]
        assert statuses == [401, 401, 401, 401, 401, 429]

        response = client.post("/auth/reset-admin-password", json=payload)
        assert response.status_code == 429
        assert response.json()["message"] == "Too many password reset attempts. Please try again later."
        assert int(response.headers["Retry-After"]) > 0

    def test_login_limited_after_ten_attempts(self, client, hr_user):
        payload = {"email": "hr@hrportal.test", "password": "wrong-password"}
        for _ in range(10):
            assert client.post("/auth/login", json=payload).status_code == 401

        response = client.post("/auth/login", json={"email": "hr@hrportal.test", "password": "password123"})
        assert response.status_code == 429

    def test_recovery_limiter_counts_after_authentication(self, client, hr_headers):
        # Refused callers never reach the limiter
        for _ in range(12):
            response = client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=hr_headers)
            assert response.status_code == 403


class TestExpiredWindowCleanup:
    """Windows that have run out are dropped, not kept forever."""

    def test_expired_keys_are_swept(self):
        clock = FakeClock()
        limiter = FixedWindowLimiter("test", limit=5, window=10, clock=clock)
        for i in range(1000):
            limiter.check(f"10.0.{i // 256}.{i % 256}")
        assert len(limiter._windows) == 1000

        clock.now += 10_000
        assert limiter.check("fresh").allowed
        assert list(limiter._windows) == ["fresh"]

    def test_live_windows_survive_a_sweep(self):
        clock = FakeClock()
        limiter = FixedWindowLimiter("test", limit=1, window=10, clock=clock)
        limiter.check("old")
        clock.now += 5
        limiter.check("recent")

        clock.now += 6
        limiter.check("other")
        assert "old" not in limiter._windows
        assert not limiter.check("recent").allowed


class TestForwardedAddresses:
    """Only the hop appended by our own proxy is used as the key."""

    def test_spoofed_leftmost_entries_share_one_budget(self, client, primary_admin, monkeypatch):
        monkeypatch.setattr(get_settings(), "TRUST_FORWARDED_FOR", True)
        monkeypatch.setattr(get_settings(), "TRUSTED_PROXY_HOPS", 1)
        payload = {"answer": "guess", "new_password": "password456"}

        statuses = [
            client.post(
                "/auth/reset-admin-password",
                json=payload,
                headers={"X-Forwarded-For": f"10.0.0.{i}, 203.0.113.7"},
            ).status_code
            for i in range(6)
        ]
        assert statuses == [401, 401, 401, 401, 401, 429]

    def test_distinct_proxy_reported_addresses_are_independent(self, client, primary_admin, monkeypatch):
        monkeypatch.setattr(get_settings(), "TRUST_FORWARDED_FOR", True)
        payload = {"answer": "guess", "new_password": "password456"}

        for _ in range(5):
            client.post("/auth/reset-admin-password", json=payload, headers={"X-Forwarded-For": "203.0.113.7"})
        other = client.post(
            "/auth/reset-admin-password", json=payload, headers={"X-Forwarded-For": "198.51.100.9"}
        )
        assert other.status_code == 401

    def test_header_ignored_unless_trusted(self, client, primary_admin):
        payload = {"answer": "guess", "new_password": "password456"}
        statuses = [
            client.post(
                "/auth/reset-admin-password",
                json=payload,
                headers={"X-Forwarded-For": f"203.0.113.{i}"},
            ).status_code
            for i in range(6)
        ]
        assert statuses[-1] == 429
