import pytest

from permtree.changes import Changes, FieldChange
from permtree.exceptions import InvalidArgument


def test_empty_by_default() -> None:
    changes = Changes()
    assert changes.is_empty()
    assert not changes.is_present()
    assert not changes


def test_add_same_value_is_noop() -> None:
    changes = Changes()
    changes.add("effect", "ALLOW", "ALLOW")
    assert changes.is_empty()


def test_add_records_old_value_on_both_sides() -> None:
    changes = Changes()
    changes.add("effect", "ALLOW", "DENY")
    assert changes.effect == FieldChange(old="ALLOW", new="ALLOW")
    assert changes.is_present()
    assert changes.to_dict()["effect"] == {"old": "ALLOW", "new": "ALLOW"}


def test_add_untracked_field() -> None:
    with pytest.raises(InvalidArgument):
        Changes().add("title", "a", "b")


def test_add_privilege() -> None:
    changes = Changes()
    changes.add_privilege("read", False, True)
    changes.add_privilege("write", True, True)
    assert changes.privileges == {
        "old": {"read": False, "write": True},
        "new": {"read": True, "write": True},
    }
    assert changes.to_dict() == {"effect": {}, "privileges": changes.privileges}


def test_copy() -> None:
    changes = Changes()
    changes.add_privilege("read", False, True)
    copy = changes.copy()
    copy.add_privilege("write", False, True)
    assert "write" not in changes.privileges["new"]
