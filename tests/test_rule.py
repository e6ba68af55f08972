import pytest

from permtree.changes import Changes
from permtree.config import PermissionsConfig
from permtree.exceptions import InvalidArgument, InvalidPrivilegeValue, InvalidRuleSpec
from permtree.rule import Rule
from permtree.types import Effect


def make_rule(resource: str = "foo") -> Rule:
    return Rule(resource, privileges={"bar": True}, title=f"{resource} title")


def test_rule_from_dict() -> None:
    rule = Rule.from_dict({"resource": "foo", "privileges": {"bar": True}, "title": "foo title"})
    assert rule.resource == "foo"
    assert rule.privileges == {"bar": True}
    assert rule.title == "foo title"
    assert rule.effect is Effect.ALLOW


def test_rule_from_dict_ignores_parent() -> None:
    rule = Rule.from_dict({"resource": "foo::bar", "privileges": {}, "effect": "DENY", "parent": "other"})
    assert rule.effect is Effect.DENY
    assert rule.parent == "foo"


def test_rule_from_dict_rejects_bad_spec() -> None:
    with pytest.raises(InvalidRuleSpec):
        Rule.from_dict({"privileges": {"bar": True}})
    with pytest.raises(InvalidRuleSpec):
        Rule.from_dict({"resource": "foo", "effect": "MAYBE"})


def test_unknown_effect() -> None:
    with pytest.raises(InvalidArgument):
        Rule("foo", effect="MAYBE")


def test_privilege_normalization() -> None:
    rule = Rule(
        "foo",
        privileges={"bar": "true", "baz": "false", "ban": None, "one": 1, "zero": 0, "inh": "inherited", 7: "x"},
    )
    assert rule.privileges == {
        "bar": True,
        "baz": False,
        "ban": False,
        "one": True,
        "zero": False,
        "inh": "inherited",
        "7": False,
    }


def test_strict_privileges() -> None:
    config = PermissionsConfig(strict_privileges=True)
    assert Rule("foo", privileges={"a": "false", "b": None}, config=config).privileges == {"a": False, "b": False}
    with pytest.raises(InvalidPrivilegeValue):
        Rule("foo", privileges={"a": "yes"}, config=config)


def test_parent() -> None:
    assert make_rule("foo").parent is None
    assert make_rule("foo::bar").parent == "foo"


def test_equality() -> None:
    rule = Rule("foo", privileges={"read": True})
    assert rule == Rule("foo", privileges={"read": True}, title="ignored")
    assert rule != Rule("bar", privileges={"read": True})
    assert rule != Rule("foo", privileges={"read": True, "write": False})
    assert rule != Rule("foo", privileges={"read": True}, effect=Effect.DENY)


def test_changes_start_empty() -> None:
    rule = make_rule()
    assert isinstance(rule.changes, Changes)
    assert not rule.is_changed()


def test_update_different_resource() -> None:
    with pytest.raises(InvalidArgument):
        make_rule().update(make_rule("bar"))


def test_update_tracks_privilege_changes() -> None:
    rule = make_rule()
    result = rule.update(Rule("foo", privileges={"bar": False, "baz": True}))
    assert result is rule
    assert rule.privileges == {"bar": False, "baz": True}
    assert rule.is_changed()
    assert rule.changes.privileges == {
        "old": {"bar": True, "baz": False},
        "new": {"bar": False, "baz": True},
    }


def test_update_without_difference_records_nothing() -> None:
    rule = make_rule()
    rule.update(Rule("foo", privileges={"bar": True}))
    assert not rule.is_changed()


def test_update_new_false_privilege_is_stored_but_not_recorded() -> None:
    rule = make_rule()
    rule.update(Rule("foo", privileges={"baz": False}))
    assert rule.privileges == {"bar": True, "baz": False}
    assert not rule.is_changed()


def test_update_from_inherited_is_not_recorded() -> None:
    rule = Rule("foo", privileges={"bar": "inherited"})
    rule.update(Rule("foo", privileges={"bar": True}))
    assert rule.privileges == {"bar": True}
    assert not rule.is_changed()


def test_clone_is_independent() -> None:
    rule = make_rule()
    rule.update(Rule("foo", privileges={"bar": False}))
    copy = rule.clone()
    assert copy == rule
    assert copy.title == "foo title"
    assert not copy.is_changed()
    copy.privileges["bar"] = True
    assert rule.privileges == {"bar": False}

    with_history = rule.clone(keep_changes=True)
    assert with_history.changes.privileges == rule.changes.privileges
    assert with_history.changes is not rule.changes


def test_privileges_as_list() -> None:
    rule = Rule("foo", privileges={"a": True, "b": False, "c": "inherited"})
    assert rule.privileges_as_list() == ["a"]


def test_to_dict() -> None:
    assert Rule("foo::bar", privileges={"a": True}, title="Bar").to_dict() == {
        "resource": "foo::bar",
        "privileges": {"a": True},
        "effect": "ALLOW",
        "parent": "foo",
        "title": "Bar",
    }
    assert "title" not in Rule("foo", title="  ").to_dict()


def test_rule_from_dict_null_fields_use_defaults() -> None:
    rule = Rule.from_dict({"resource": "x", "privileges": None, "effect": None, "title": None})
    assert rule.privileges == {}
    assert rule.effect is Effect.ALLOW
    assert rule.title is None
