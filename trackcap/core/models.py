from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .capacity import CapacityTermImpl, TrackCapacityImpl

Minutes = int


@dataclass(frozen=True)
class GeneralParameters:
    window: Minutes  # daily maintenance window, 0..1440
    alpha_s: float  # heterogeneity of the train mix
    alpha_t: float  # technical state of the line
    alpha_u: float  # unevenness of traffic over the day
    expected_interval: Minutes  # headway reserved per secondary train pair


class MotionType(str, Enum):
    CARGO = "Cargo"
    PASSENGER = "Passenger"


@dataclass(frozen=True)
class TrainPairs:
    qty: int
    # converts one pair of this category into primary-equivalent slots
    removal_coefficient: int = 1

    def rated_qty(self) -> int:
        return self.qty * self.removal_coefficient


def _no_trains() -> TrainPairs:
    return TrainPairs(qty=0, removal_coefficient=1)


@dataclass(frozen=True)
class UnidirectionalMotionDimensions:
    primary_motion_type: MotionType
    primary_heavy: TrainPairs = field(default_factory=_no_trains)
    primary: TrainPairs = field(default_factory=_no_trains)
    secondary: TrainPairs = field(default_factory=_no_trains)
    suburban: TrainPairs = field(default_factory=_no_trains)

    def to_capacity_term(self) -> CapacityTermImpl:
        """Capacity already taken by the scheduled trains, no formula involved."""
        from .capacity import CapacityTermImpl

        prim = self.primary.qty + self.primary_heavy.qty
        sec = self.secondary.qty + self.suburban.qty
        return CapacityTermImpl.dispatch(self.primary_motion_type, prim, sec)


@dataclass(frozen=True)
class MotionDimensions:
    odd: UnidirectionalMotionDimensions
    even: UnidirectionalMotionDimensions

    def to_track_capacity(self) -> TrackCapacityImpl:
        from .capacity import TrackCapacityImpl

        return TrackCapacityImpl(self.odd.to_capacity_term(), self.even.to_capacity_term())


@dataclass(frozen=True)
class TrackSection:
    id: str
    motion: MotionDimensions
    period: float  # minimum headway between primary train pairs, minutes
    odd_routes_present: bool = True
    even_routes_present: bool = True


@dataclass(frozen=True)
class RouteModel:
    sections: Tuple[TrackSection, ...]

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))
        seen = set()
        for s in self.sections:
            if s.id in seen:
                raise ValueError(f"Duplicate section id {s.id}")
            seen.add(s.id)

    def section_by_id(self, sid: str) -> TrackSection:
        for s in self.sections:
            if s.id == sid:
                return s
        raise KeyError(f"Section {sid} not found")
