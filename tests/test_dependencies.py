import pytest

from poleguard.api.dependencies import CallerContext, Role, http_error
from poleguard.errors import (
    ElevationUnavailableError,
    InvalidBoundaryError,
    NotFoundError,
    ZoneAccessError,
)


def test_super_admin_is_unscoped():
    caller = CallerContext(user_id=1, role=Role.SUPER_ADMIN, zone_id=None)
    assert caller.zone_scope is None
    assert caller.target_zone(4) == 4
    with pytest.raises(ValueError, match="Zone is required"):
        caller.target_zone(None)


@pytest.mark.parametrize("role", [Role.ADMIN, Role.AGENT])
def test_scoped_roles_are_confined_to_their_zone(role):
    caller = CallerContext(user_id=2, role=role, zone_id=7)
    assert caller.zone_scope == 7
    assert caller.target_zone(99) == 7
    assert caller.target_zone(None) == 7


@pytest.mark.parametrize("role", [Role.ADMIN, Role.AGENT])
def test_scoped_roles_without_zone_are_refused(role):
    caller = CallerContext(user_id=2, role=role, zone_id=None)
    with pytest.raises(ZoneAccessError):
        caller.zone_scope
    with pytest.raises(ZoneAccessError):
        caller.target_zone(3)


@pytest.mark.parametrize(
    "exc,code",
    [
        (InvalidBoundaryError("bad"), 422),
        (ValueError("bad"), 422),
        (NotFoundError("Pole", 1), 404),
        (ZoneAccessError("denied"), 403),
        (ElevationUnavailableError("down"), 503),
        (ConnectionError("db down"), 503),
    ],
)
def test_http_error_mapping(exc, code):
    assert http_error(exc).status_code == code
