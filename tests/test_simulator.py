from trackcap.core.capacity import CapacityTermImpl, TrackCapacityImpl, FAILED_TRACK_CAPACITY, WAS_NOT_MODELED
from trackcap.sim.simulator import summarize_capacity, capacity_reserve


def test_summarize_ok_capacity():
    cap = TrackCapacityImpl(CapacityTermImpl(47, 5, 0, 0), WAS_NOT_MODELED)
    s = summarize_capacity(cap)
    assert s["status"] == "ok"
    assert s["odd"]["modeled"] is True
    assert s["odd"]["primary_cargo"] == 47
    assert s["odd"]["primary_total"] == 47
    assert s["odd"]["secondary_total"] == 5
    assert s["odd"]["trivial"] is False
    assert s["odd"]["oversubscribed"] is False
    assert s["even"] == {"modeled": False}


def test_summarize_oversubscribed_and_trivial():
    cap = TrackCapacityImpl(CapacityTermImpl(-3, 1, 0, 0), CapacityTermImpl())
    s = summarize_capacity(cap)
    assert s["odd"]["oversubscribed"] is True
    assert s["even"]["trivial"] is True


def test_summarize_failed():
    assert summarize_capacity(FAILED_TRACK_CAPACITY) == {"status": "failed", "odd": None, "even": None}


def test_reserve_is_required_minus_used():
    required = TrackCapacityImpl(CapacityTermImpl(47, 5, 80, 9), CapacityTermImpl(49, 4, 0, 0))
    used = TrackCapacityImpl(CapacityTermImpl(10, 5, 24, 9), CapacityTermImpl(10, 4, 0, 0))
    r = capacity_reserve(required, used)
    assert r["status"] == "ok"
    assert r["odd"] == {"primary_cargo": 37, "secondary_passenger": 0, "primary_passenger": 56, "secondary_cargo": 0}
    assert r["even"]["primary_cargo"] == 39
    assert r["deficit"] is False


def test_reserve_deficit_and_unmodeled():
    required = TrackCapacityImpl(CapacityTermImpl(5, 0, 0, 0), WAS_NOT_MODELED)
    used = TrackCapacityImpl(CapacityTermImpl(8, 0, 0, 0), CapacityTermImpl(1, 0, 0, 0))
    r = capacity_reserve(required, used)
    assert r["odd"]["primary_cargo"] == -3
    assert r["even"] is None
    assert r["deficit"] is True


def test_reserve_failed():
    used = TrackCapacityImpl(CapacityTermImpl(8, 0, 0, 0), CapacityTermImpl(1, 0, 0, 0))
    assert capacity_reserve(FAILED_TRACK_CAPACITY, used)["status"] == "failed"
    assert capacity_reserve(used, FAILED_TRACK_CAPACITY)["status"] == "failed"
