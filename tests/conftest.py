import pytest

from permtree.permission_list import PermissionList


@pytest.fixture
def animals() -> PermissionList:
    return PermissionList(
        {
            "animal": {"resource": "animal", "privileges": {"move": True}, "title": "Animal"},
            "animal::bird": {"resource": "animal::bird", "privileges": {"fly": True}, "title": "Bird"},
            "animal::bird::blackbird": {
                "resource": "animal::bird::blackbird",
                "privileges": {"sing": True},
                "title": "Blackbird",
            },
            "animal::cat": {"resource": "animal::cat", "privileges": {"meow": True}, "title": "Cat"},
            "tree": {"resource": "tree", "privileges": {"move": False}, "title": "Tree"},
        }
    )
