from __future__ import annotations

import pytest

from popover.core.hosts import Subscription, SubscriptionGroup


def test_subscription_release_is_idempotent():
    calls = []
    sub = Subscription(lambda: calls.append(1), name="x")
    assert sub.active
    sub.release()
    sub()
    assert calls == [1]
    assert not sub.active


def test_empty_subscription_is_inactive():
    sub = Subscription(None)
    assert not sub.active
    sub.release()


def test_group_releases_everything_even_if_one_fails():
    calls = []

    def broken():
        raise RuntimeError("boom")

    group = SubscriptionGroup()
    group.add(lambda: calls.append("a"))
    group.add(broken)
    group.add(lambda: calls.append("c"))
    assert len(group) == 3

    with pytest.raises(RuntimeError):
        group.release_all()
    assert calls == ["a", "c"]
    assert len(group) == 0
    group.release_all()
