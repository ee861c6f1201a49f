import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .models import GeneralParameters, RouteModel, TrackSection
from .capacity import TrackCapacity, FailedTrackCapacity, total_capacity

logger = logging.getLogger(__name__)

# "required": what the section could carry (headway formula)
# "used": what is already scheduled on it (direct sum of train pairs)
MODES = ("required", "used")


@dataclass
class RouteCapacity:
    total: TrackCapacity
    by_section: Dict[str, TrackCapacity] = field(default_factory=dict)
    # Failed carries no cause, so the offending sections are kept here
    failed_sections: List[str] = field(default_factory=list)


def evaluate_section(section: TrackSection, gp: GeneralParameters, mode: str = "required") -> TrackCapacity:
    if mode == "required":
        return TrackCapacity.create_instance(
            gp,
            section.motion,
            section.odd_routes_present,
            section.even_routes_present,
            section.period,
        )
    if mode == "used":
        return section.motion.to_track_capacity()
    raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")


def route_capacity(route: RouteModel, gp: GeneralParameters, mode: str = "required") -> RouteCapacity:
    results: List[TrackCapacity] = []
    by_section: Dict[str, TrackCapacity] = {}
    failed: List[str] = []
    for sec in route.sections:
        cap = evaluate_section(sec, gp, mode=mode)
        results.append(cap)
        by_section[sec.id] = cap
        if isinstance(cap, FailedTrackCapacity):
            failed.append(sec.id)

    total = total_capacity(results)
    if failed:
        logger.warning("Route %s capacity failed on sections: %s", mode, ", ".join(failed))
    logger.info("Evaluated %s capacity for %d sections", mode, len(results))
    return RouteCapacity(total=total, by_section=by_section, failed_sections=failed)
