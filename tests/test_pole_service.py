import pytest
from conftest import CENTER

from poleguard.errors import (
    InvalidCoordinateError,
    NotFoundError,
    OutsideZoneBoundaryError,
    PoleOverlapError,
    ZoneAccessError,
)
from poleguard.models.domain import LineOfSightOutcome, LocationStatus, Status
from poleguard.services.land_owners import create_land_owner
from poleguard.services.location.service import check_location, find_nearby_poles, load_snapshot
from poleguard.services.poles import service as pole_service


def _create(repo, cache, zone, lat=CENTER[0], lng=CENTER[1], radius=100.0, name="Tower A", **extra):
    return pole_service.create_pole(
        repo,
        cache,
        pole_name=name,
        latitude=lat,
        longitude=lng,
        pole_height=20.0,
        restricted_radius=radius,
        zone_id=zone.id,
        **extra,
    )


def test_create_pole_inside_zone(repo, cache, zone):
    pole = _create(repo, cache, zone, created_by=4)
    assert pole.zone_id == zone.id
    assert pole.status == Status.ACTIVE
    assert pole.created_by == 4
    assert repo.get_pole(pole.id) == pole


def test_pole_outside_zone_is_rejected(repo, cache, zone):
    with pytest.raises(OutsideZoneBoundaryError, match="within zone boundary"):
        _create(repo, cache, zone, lat=25.0, lng=47.0)


def test_pole_in_unknown_zone_is_rejected(repo, cache, zone):
    with pytest.raises(NotFoundError):
        pole_service.create_pole(
            repo,
            cache,
            pole_name="Lost",
            latitude=24.05,
            longitude=46.05,
            pole_height=10,
            restricted_radius=100,
            zone_id=zone.id + 50,
        )


def test_overlapping_pole_is_rejected(repo, cache, zone):
    existing = _create(repo, cache, zone)
    with pytest.raises(PoleOverlapError) as excinfo:
        _create(repo, cache, zone, lat=24.0505, lng=46.05, name="Tower B")
    assert excinfo.value.pole.id == existing.id
    assert "Tower A" in str(excinfo.value)


def test_inactive_poles_still_block_placement(repo, cache, zone):
    _create(repo, cache, zone, status=Status.INACTIVE)
    with pytest.raises(PoleOverlapError):
        _create(repo, cache, zone, name="Tower B")


@pytest.mark.parametrize("height,radius", [(0, 100), (-5, 100), (10, 49), (10, 5001)])
def test_dimensions_are_validated(repo, cache, zone, height, radius):
    with pytest.raises(InvalidCoordinateError):
        pole_service.create_pole(
            repo,
            cache,
            pole_name="Bad",
            latitude=24.05,
            longitude=46.05,
            pole_height=height,
            restricted_radius=radius,
            zone_id=zone.id,
        )


def test_new_pole_is_visible_to_next_location_check(repo, cache, zone):
    # Warm the cache with an empty pole list first.
    assert check_location(repo, cache, *CENTER, zone.id).status == LocationStatus.GREEN
    _create(repo, cache, zone)
    verdict = check_location(repo, cache, *CENTER, zone.id)
    assert verdict.status == LocationStatus.RED
    assert verdict.nearest_pole.pole_name == "Tower A"


def test_deactivated_pole_stops_restricting(repo, cache, zone):
    pole = _create(repo, cache, zone)
    assert check_location(repo, cache, *CENTER, zone.id).status == LocationStatus.RED
    toggled = pole_service.toggle_pole_status(repo, cache, pole.id)
    assert toggled.status == Status.INACTIVE
    assert check_location(repo, cache, *CENTER, zone.id).status == LocationStatus.GREEN
    assert load_snapshot(repo, cache, zone.id).active_poles == ()


def test_update_moving_outside_zone_is_rejected(repo, cache, zone):
    pole = _create(repo, cache, zone)
    with pytest.raises(OutsideZoneBoundaryError):
        pole_service.update_pole(repo, cache, pole.id, latitude=25.0, longitude=47.0)


def test_update_growing_radius_into_neighbour_is_rejected(repo, cache, zone):
    pole = _create(repo, cache, zone)
    _create(repo, cache, zone, lat=24.053, lng=46.05, name="Tower B")
    with pytest.raises(PoleOverlapError):
        pole_service.update_pole(repo, cache, pole.id, restricted_radius=300)


def test_update_keeps_own_position_without_self_overlap(repo, cache, zone):
    pole = _create(repo, cache, zone)
    updated = pole_service.update_pole(repo, cache, pole.id, pole_name="Renamed", pole_height=35.0)
    assert updated.pole_name == "Renamed"
    assert updated.pole_height == 35.0
    assert (updated.latitude, updated.longitude) == CENTER


def test_update_moves_pole_and_refreshes_cache(repo, cache, zone):
    pole = _create(repo, cache, zone)
    check_location(repo, cache, *CENTER, zone.id)
    pole_service.update_pole(repo, cache, pole.id, latitude=24.02, longitude=46.02)
    assert check_location(repo, cache, *CENTER, zone.id).status == LocationStatus.GREEN
    assert check_location(repo, cache, 24.02, 46.02, zone.id).status == LocationStatus.RED


def test_zone_scope_blocks_other_zones(repo, cache, zone):
    pole = _create(repo, cache, zone)
    other_zone = zone.id + 1
    with pytest.raises(ZoneAccessError):
        pole_service.get_pole(repo, pole.id, zone_scope=other_zone)
    with pytest.raises(ZoneAccessError):
        pole_service.delete_pole(repo, cache, pole.id, zone_scope=other_zone)
    assert pole_service.get_pole(repo, pole.id, zone_scope=zone.id) == pole


def test_land_owner_must_share_the_zone(repo, cache, zone):
    other = repo.create_zone(
        zone_name="Elsewhere",
        zone_boundary=[{"lat": 0, "lng": 0}, {"lat": 0, "lng": 1}, {"lat": 1, "lng": 1}],
        description=None,
        status=Status.ACTIVE,
        created_by=None,
    )
    owner = create_land_owner(
        repo, owner_name="Saad", mobile_number="0500000000", address="Street 1", zone_id=other.id
    )
    with pytest.raises(ValueError, match="pole's zone"):
        _create(repo, cache, zone, land_owner_id=owner.id)
    with pytest.raises(NotFoundError):
        _create(repo, cache, zone, land_owner_id=9999)


def test_delete_pole_removes_its_calculations(repo, cache, zone):
    pole = _create(repo, cache, zone)
    repo.create_calculation(
        pole_id=pole.id,
        agent_latitude=24.06,
        agent_longitude=46.05,
        agent_elevation=110.0,
        pole_elevation=100.0,
        elevation_difference=10.0,
        distance_from_pole=1111.9,
        result=LineOfSightOutcome.PARTIAL,
        extra_height_required=10.0,
        calculated_by=None,
        calculation_notes=None,
    )
    pole_service.delete_pole(repo, cache, pole.id)
    assert repo.get_pole(pole.id) is None
    assert repo.count_calculations() == 0
    with pytest.raises(NotFoundError):
        pole_service.get_pole(repo, pole.id)


def test_find_nearby_poles_uses_active_poles_only(repo, cache, zone):
    near = _create(repo, cache, zone)
    far = _create(repo, cache, zone, lat=24.08, lng=46.08, name="Tower B")
    _create(repo, cache, zone, lat=24.02, lng=46.02, name="Tower C", status=Status.INACTIVE)
    entries = find_nearby_poles(repo, cache, 24.051, 46.05, zone.id)
    assert [entry.pole.id for entry in entries] == [near.id, far.id]
    assert entries[0].is_restricted is False


def test_list_poles_is_newest_first(repo, cache, zone):
    first = _create(repo, cache, zone)
    second = _create(repo, cache, zone, lat=24.08, lng=46.08, name="Tower B")
    assert [pole.id for pole in pole_service.list_poles(repo, zone_id=zone.id)] == [second.id, first.id]
