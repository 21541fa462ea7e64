# storefront/domain/entities.py
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Set


class Coordinate(NamedTuple):
    lat: float
    lng: float


@dataclass
class ZoneSnapshot:
    """Zone as seen by the membership engine: polygon plus linked stores."""

    id: int
    name: str
    vertices: List[Coordinate] = field(default_factory=list)
    store_ids: Set[int] = field(default_factory=set)


@dataclass
class UserLocation:
    id: int
    zone_id: Optional[int]
    latitude: Optional[float]
    longitude: Optional[float]

    @property
    def point(self) -> Optional[Coordinate]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)


@dataclass
class Identity:
    user_id: int
    is_admin: bool = False


@dataclass
class SyncResult:
    zone_id: int
    assigned: List[int] = field(default_factory=list)
    unassigned: List[int] = field(default_factory=list)
    reassigned: List[int] = field(default_factory=list)
    removed_items: int = 0

    @property
    def changed_users(self) -> List[int]:
        return self.assigned + self.unassigned + self.reassigned
