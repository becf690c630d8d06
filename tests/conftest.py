import pytest

from poleguard.models.domain import Pole, Status, Zone
from poleguard.persistence.repository import InMemoryRepository
from poleguard.services.cache import ZonePoleSnapshotCache

# Roughly 11 km x 10 km around central Riyadh.
SQUARE = [[24.0, 46.0], [24.0, 46.1], [24.1, 46.1], [24.1, 46.0]]
CENTER = (24.05, 46.05)


def make_pole(
    pid: int,
    lat: float,
    lng: float,
    radius: float = 100.0,
    zone_id: int = 1,
    status: Status = Status.ACTIVE,
    height: float = 20.0,
) -> Pole:
    return Pole(
        id=pid,
        pole_name=f"Pole {pid}",
        latitude=lat,
        longitude=lng,
        pole_height=height,
        restricted_radius=radius,
        zone_id=zone_id,
        status=status,
    )


def make_zone(zid: int = 1, boundary=None) -> Zone:
    return Zone(id=zid, zone_name=f"Zone {zid}", zone_boundary=list(boundary or SQUARE))


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def cache() -> ZonePoleSnapshotCache:
    return ZonePoleSnapshotCache(zone_ttl=3600, poles_ttl=300)


@pytest.fixture
def zone(repo: InMemoryRepository) -> Zone:
    return repo.create_zone(
        zone_name="Riyadh North",
        zone_boundary=[{"lat": lat, "lng": lng} for lat, lng in SQUARE],
        description=None,
        status=Status.ACTIVE,
        created_by=None,
    )
