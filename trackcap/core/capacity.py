"""Capacity algebra for a single track section.

A section's capacity is a pair of directional terms (odd, even). Terms from
several sections combine with ``+``:

* ``WAS_NOT_MODELED`` is the identity of term addition: a direction that was
  left out of the calculation contributes nothing.
* ``FAILED_TRACK_CAPACITY`` absorbs every other track capacity: once a
  section could not be evaluated the whole aggregate is failed.

Both additions are associative and commutative, so a route may be folded in
any order.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, Any, Dict, Iterable

from .models import MotionType

if TYPE_CHECKING:
    from .models import GeneralParameters, MotionDimensions, UnidirectionalMotionDimensions

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440


class CapacityTerm:
    """Directional capacity of a section, measured or not modeled."""

    def __add__(self, other: Any) -> Any:
        raise NotImplementedError("No implementation for method: __add__")


class WasNotModeled(CapacityTerm):
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __add__(self, other: Any) -> Any:
        if isinstance(other, CapacityTerm):
            return other
        return NotImplemented

    def __repr__(self) -> str:
        return "WAS_NOT_MODELED"


WAS_NOT_MODELED = WasNotModeled()


@dataclass(frozen=True)
class CapacityTermImpl(CapacityTerm):
    # train pairs per day; negative values mean the direction is oversubscribed
    primary_cargo: int = 0
    secondary_passenger: int = 0
    primary_passenger: int = 0
    secondary_cargo: int = 0

    def is_trivial(self) -> bool:
        return (
            self.primary_cargo == 0
            and self.secondary_passenger == 0
            and self.primary_passenger == 0
            and self.secondary_cargo == 0
        )

    def primary_total(self) -> int:
        return self.primary_cargo + self.primary_passenger

    def secondary_total(self) -> int:
        return self.secondary_passenger + self.secondary_cargo

    def as_dict(self) -> Dict[str, int]:
        return {
            "primary_cargo": self.primary_cargo,
            "secondary_passenger": self.secondary_passenger,
            "primary_passenger": self.primary_passenger,
            "secondary_cargo": self.secondary_cargo,
        }

    def __add__(self, other: Any) -> Any:
        if isinstance(other, CapacityTermImpl):
            return CapacityTermImpl(
                primary_cargo=self.primary_cargo + other.primary_cargo,
                secondary_passenger=self.secondary_passenger + other.secondary_passenger,
                primary_passenger=self.primary_passenger + other.primary_passenger,
                secondary_cargo=self.secondary_cargo + other.secondary_cargo,
            )
        if isinstance(other, WasNotModeled):
            return self
        return NotImplemented

    @classmethod
    def dispatch(cls, motion_type: MotionType, prim: int, sec: int) -> "CapacityTermImpl":
        # Secondary pairs on a cargo line are booked as secondary passenger,
        # on a passenger line as secondary cargo.
        if motion_type == MotionType.CARGO:
            return cls(primary_cargo=prim, secondary_passenger=sec)
        if motion_type == MotionType.PASSENGER:
            return cls(primary_passenger=prim, secondary_cargo=sec)
        raise ValueError(f"Unknown motion type: {motion_type!r}")

    @classmethod
    def create_instance(
        cls,
        gp: "GeneralParameters",
        md: "UnidirectionalMotionDimensions",
        period: float,
    ) -> "CapacityTermImpl":
        """Capacity a direction can carry given its headway ``period`` (minutes).

        Time left after the maintenance window and the alpha losses is first
        reduced by the slots reserved for secondary and suburban pairs; the
        remainder divided by ``period`` is the primary capacity, truncated
        toward zero. Secondary capacity is the plain count of those pairs.
        A zero period yields an all-zero term. A period that is negative, not
        finite, or so small that the quotient overflows is a ValueError.
        """
        if not math.isfinite(period) or period < 0:
            raise ValueError(f"period must be finite and non-negative, got {period}")
        if period == 0:
            return cls(0, 0, 0, 0)

        t = (MINUTES_PER_DAY - gp.window) * gp.alpha_s * gp.alpha_t * gp.alpha_u
        s = gp.expected_interval * (md.secondary.rated_qty() + md.suburban.rated_qty())
        quotient = (t - s) / period
        if not math.isfinite(quotient):
            raise ValueError(f"period {period} too small, capacity overflows")
        prim = int(quotient)
        sec = md.secondary.qty + md.suburban.qty
        term = cls.dispatch(md.primary_motion_type, prim, sec)
        if prim < 0:
            logger.warning("Oversubscribed %s direction: reserved %.1f of %.1f min, primary=%d",
                           md.primary_motion_type.value, s, t, prim)
        logger.debug("Capacity term t=%.2f s=%.2f period=%s -> %s", t, s, period, term)
        return term


class TrackCapacity:
    """Capacity of one section for both directions, or a failure marker."""

    def __add__(self, other: Any) -> Any:
        raise NotImplementedError("No implementation for method: __add__")

    @staticmethod
    def create_instance(
        gp: "GeneralParameters",
        md: "MotionDimensions",
        odd_routes_present: bool,
        even_routes_present: bool,
        period: float,
    ) -> "TrackCapacity":
        if not math.isfinite(period):
            raise ValueError(f"period must be finite, got {period}")
        if period < 0:
            logger.warning("Negative period %s, section capacity failed", period)
            return FAILED_TRACK_CAPACITY

        odd_term = CapacityTermImpl.create_instance(gp, md.odd, period) if odd_routes_present else WAS_NOT_MODELED
        even_term = CapacityTermImpl.create_instance(gp, md.even, period) if even_routes_present else WAS_NOT_MODELED
        return TrackCapacityImpl(odd_term, even_term)


@dataclass(frozen=True)
class TrackCapacityImpl(TrackCapacity):
    odd: CapacityTerm
    even: CapacityTerm

    def __add__(self, other: Any) -> Any:
        if isinstance(other, FailedTrackCapacity):
            return FAILED_TRACK_CAPACITY
        if isinstance(other, TrackCapacityImpl):
            return TrackCapacityImpl(self.odd + other.odd, self.even + other.even)
        return NotImplemented


class FailedTrackCapacity(TrackCapacity):
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __add__(self, other: Any) -> Any:
        if isinstance(other, TrackCapacity):
            return FAILED_TRACK_CAPACITY
        return NotImplemented

    def __repr__(self) -> str:
        return "FAILED_TRACK_CAPACITY"


FAILED_TRACK_CAPACITY = FailedTrackCapacity()
EMPTY_TRACK_CAPACITY = TrackCapacityImpl(WAS_NOT_MODELED, WAS_NOT_MODELED)


def total_capacity(capacities: Iterable[TrackCapacity]) -> TrackCapacity:
    return reduce(lambda acc, c: acc + c, capacities, EMPTY_TRACK_CAPACITY)
