from __future__ import annotations

from types import SimpleNamespace

from bson import ObjectId

from taskfeed.services.relations import FOLLOW, add_member, remove_member


def _user() -> SimpleNamespace:
    return SimpleNamespace(id=ObjectId(), following=[], followers=[])


def test_link_and_unlink_touch_both_sides() -> None:
    alice, bob = _user(), _user()

    FOLLOW.link(alice, bob)
    FOLLOW.link(alice, bob)

    assert alice.following == [bob.id]
    assert bob.followers == [alice.id]
    assert FOLLOW.contains(alice, bob)
    assert not FOLLOW.contains(bob, alice)

    FOLLOW.unlink(alice, bob)

    assert alice.following == []
    assert bob.followers == []


def test_member_helpers_report_changes() -> None:
    member = ObjectId()
    members: list = []

    assert add_member(members, member) is True
    assert add_member(members, member) is False
    assert remove_member(members, member) is True
    assert remove_member(members, member) is False
    assert members == []
