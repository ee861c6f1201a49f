from typing import List, Dict, Any, Optional, Tuple
from trackcap.core.models import (
    GeneralParameters,
    MotionDimensions,
    MotionType,
    RouteModel,
    TrackSection,
    TrainPairs,
    UnidirectionalMotionDimensions,
)
from trackcap.core.capacity import CapacityTermImpl, TrackCapacityImpl
from trackcap.core.solver import RouteCapacity, route_capacity
from trackcap.sim.simulator import FIELDS


_CATEGORIES = ("primary_heavy", "primary", "secondary", "suburban")


def _direction_from_dict(d: Dict[str, Any]) -> UnidirectionalMotionDimensions:
    pairs = {}
    for cat in _CATEGORIES:
        tp = d.get(cat) or {}
        pairs[cat] = TrainPairs(qty=int(tp.get("qty", 0)), removal_coefficient=int(tp.get("removal_coefficient", 1)))
    return UnidirectionalMotionDimensions(primary_motion_type=MotionType(d["primary_motion_type"]), **pairs)


def section_from_dict(s: Dict[str, Any]) -> TrackSection:
    return TrackSection(
        id=s["id"],
        motion=MotionDimensions(odd=_direction_from_dict(s["odd"]), even=_direction_from_dict(s["even"])),
        period=float(s["period"]),
        odd_routes_present=bool(s.get("odd_routes_present", True)),
        even_routes_present=bool(s.get("even_routes_present", True)),
    )


def route_from_payload(payload: Dict[str, Any]) -> Tuple[Optional[GeneralParameters], RouteModel]:
    """Build domain objects from a JSON-like route payload.

    ``general_parameters`` is optional; ``None`` is returned for it when absent
    so the caller can fall back to configured defaults.
    """
    gp_raw = payload.get("general_parameters")
    gp = GeneralParameters(**gp_raw) if gp_raw else None
    route = RouteModel(sections=[section_from_dict(s) for s in payload.get("sections", [])])
    return gp, route


def run_route(route: RouteModel, gp: GeneralParameters) -> Dict[str, RouteCapacity]:
    return {
        "required": route_capacity(route, gp, mode="required"),
        "used": route_capacity(route, gp, mode="used"),
    }


def capacity_rows(result: Dict[str, RouteCapacity]) -> List[Dict[str, Any]]:
    # Flat table: one row per section, direction and mode
    rows: List[Dict[str, Any]] = []
    for mode, rc in result.items():
        for sid, cap in rc.by_section.items():
            for direction in ("odd", "even"):
                row: Dict[str, Any] = {"section_id": sid, "direction": direction, "mode": mode}
                if not isinstance(cap, TrackCapacityImpl):
                    row["status"] = "failed"
                    term = None
                else:
                    term = getattr(cap, direction)
                    row["status"] = "ok" if isinstance(term, CapacityTermImpl) else "not_modeled"
                values = term.as_dict() if isinstance(term, CapacityTermImpl) else {}
                for f in FIELDS:
                    row[f] = values.get(f, "")
                rows.append(row)
    return rows
