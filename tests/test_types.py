import pytest

from permtree.exceptions import InvalidArgument, InvalidPrivilegeValue
from permtree.types import Effect, PrivilegeValue


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, PrivilegeValue.GRANTED),
        ("true", PrivilegeValue.GRANTED),
        (1, PrivilegeValue.GRANTED),
        (False, PrivilegeValue.DENIED),
        ("false", PrivilegeValue.DENIED),
        (0, PrivilegeValue.DENIED),
        (None, PrivilegeValue.DENIED),
        ("inherited", PrivilegeValue.INHERITED),
        ("yes", PrivilegeValue.DENIED),
        (2, PrivilegeValue.DENIED),
        (1.0, PrivilegeValue.DENIED),
    ],
)
def test_coerce(raw: object, expected: PrivilegeValue) -> None:
    assert PrivilegeValue.coerce(raw) is expected


def test_coerce_strict() -> None:
    assert PrivilegeValue.coerce("false", strict=True) is PrivilegeValue.DENIED
    with pytest.raises(InvalidPrivilegeValue) as excinfo:
        PrivilegeValue.coerce("yes", strict=True)
    assert isinstance(excinfo.value, InvalidArgument)
    assert isinstance(excinfo.value, ValueError)


def test_effect_values() -> None:
    assert Effect("ALLOW") is Effect.ALLOW
    assert Effect.DENY.value == "DENY"
