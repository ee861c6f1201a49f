from typing import Any, Dict, Optional

from trackcap.core.capacity import CapacityTerm, CapacityTermImpl, TrackCapacity, TrackCapacityImpl

# Reporting helpers over computed capacities

FIELDS = ("primary_cargo", "secondary_passenger", "primary_passenger", "secondary_cargo")


def summarize_term(term: CapacityTerm) -> Dict[str, Any]:
    if not isinstance(term, CapacityTermImpl):
        return {"modeled": False}
    values = term.as_dict()
    return {
        "modeled": True,
        **values,
        "primary_total": term.primary_total(),
        "secondary_total": term.secondary_total(),
        "trivial": term.is_trivial(),
        # negative capacity: the reserved slots do not fit into the day
        "oversubscribed": any(v < 0 for v in values.values()),
    }


def summarize_capacity(capacity: TrackCapacity) -> Dict[str, Any]:
    if not isinstance(capacity, TrackCapacityImpl):
        return {"status": "failed", "odd": None, "even": None}
    return {
        "status": "ok",
        "odd": summarize_term(capacity.odd),
        "even": summarize_term(capacity.even),
    }


def _term_reserve(required: CapacityTerm, used: CapacityTerm) -> Optional[Dict[str, int]]:
    if not isinstance(required, CapacityTermImpl) or not isinstance(used, CapacityTermImpl):
        return None
    req, cur = required.as_dict(), used.as_dict()
    return {f: req[f] - cur[f] for f in FIELDS}


def capacity_reserve(required: TrackCapacity, used: TrackCapacity) -> Dict[str, Any]:
    # reserve = what could run - what already runs, per direction and slot
    if not isinstance(required, TrackCapacityImpl) or not isinstance(used, TrackCapacityImpl):
        return {"status": "failed", "odd": None, "even": None, "deficit": False}
    odd = _term_reserve(required.odd, used.odd)
    even = _term_reserve(required.even, used.even)
    deficit = any(v < 0 for r in (odd, even) if r for v in r.values())
    return {"status": "ok", "odd": odd, "even": even, "deficit": deficit}
