from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time

from xrates_bank.services.expiration import ExpirationPolicy

START = datetime(2026, 10, 16, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START)


def test_policy_is_disabled_by_default(clock):
    policy = ExpirationPolicy(clock=clock)

    assert not policy.enabled
    assert policy.ttl_seconds is None
    assert policy.expires_at is None


def test_set_ttl_computes_expiration_from_now(clock):
    policy = ExpirationPolicy(clock=clock)

    expires_at = policy.set_ttl(60)

    assert expires_at == START + timedelta(seconds=60)
    assert policy.expires_at == expires_at
    assert policy.enabled


def test_policy_expires_at_deadline(clock):
    policy = ExpirationPolicy(60, clock=clock)

    clock.advance(59)
    assert not policy.is_expired()

    clock.advance(1)
    assert policy.is_expired()


def test_refresh_moves_deadline_forward(clock):
    policy = ExpirationPolicy(60, clock=clock)
    clock.advance(90)

    expires_at = policy.refresh()

    assert expires_at == START + timedelta(seconds=150)
    assert not policy.is_expired()


def test_disabling_ttl_suspends_expiration(clock):
    policy = ExpirationPolicy(60, clock=clock)
    policy.set_ttl(None)

    clock.advance(10 ** 9)

    assert not policy.is_expired()
    assert policy.expires_at is None


def test_zero_ttl_always_expired(clock):
    policy = ExpirationPolicy(0, clock=clock)

    assert policy.is_expired()


def test_negative_ttl_rejected(clock):
    policy = ExpirationPolicy(clock=clock)

    with pytest.raises(ValueError):
        policy.set_ttl(-1)


@pytest.mark.parametrize("ttl", [float("inf"), float("nan")])
def test_non_finite_ttl_rejected(clock, ttl):
    policy = ExpirationPolicy(clock=clock)

    with pytest.raises(ValueError):
        policy.set_ttl(ttl)

    assert policy.enabled is False


def test_refresh_requires_ttl(clock):
    policy = ExpirationPolicy(clock=clock)

    with pytest.raises(RuntimeError):
        policy.refresh()


def test_is_expired_accepts_explicit_now(clock):
    policy = ExpirationPolicy(30, clock=clock)

    assert not policy.is_expired(START + timedelta(seconds=29))
    assert policy.is_expired(START + timedelta(seconds=30))


def test_default_clock_follows_frozen_time():
    with freeze_time("2026-10-16 12:00:00") as frozen:
        policy = ExpirationPolicy(120)
        assert policy.expires_at == START + timedelta(seconds=120)

        frozen.tick(timedelta(seconds=119))
        assert not policy.is_expired()

        frozen.tick(timedelta(seconds=1))
        assert policy.is_expired()
