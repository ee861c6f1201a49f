import logging

import pytest

from trackcap.core.models import GeneralParameters, MotionDimensions, MotionType, TrainPairs, UnidirectionalMotionDimensions
from trackcap.core.capacity import (
    CapacityTermImpl,
    TrackCapacity,
    TrackCapacityImpl,
    FAILED_TRACK_CAPACITY,
    EMPTY_TRACK_CAPACITY,
    WAS_NOT_MODELED,
    total_capacity,
)


GP = GeneralParameters(window=120, alpha_s=0.9, alpha_t=0.95, alpha_u=0.98, expected_interval=15)

ODD = UnidirectionalMotionDimensions(
    primary_motion_type=MotionType.CARGO,
    primary=TrainPairs(qty=10),
    secondary=TrainPairs(qty=5, removal_coefficient=2),
)
EVEN = UnidirectionalMotionDimensions(
    primary_motion_type=MotionType.PASSENGER,
    primary=TrainPairs(qty=20),
    suburban=TrainPairs(qty=4),
)
MD = MotionDimensions(odd=ODD, even=EVEN)


def test_create_instance_both_directions():
    cap = TrackCapacity.create_instance(GP, MD, True, True, 20.0)
    assert isinstance(cap, TrackCapacityImpl)
    assert cap.odd == CapacityTermImpl(47, 5, 0, 0)
    # s = 15*4 = 60, (1106.03-60)/20 ~ 52.3
    assert cap.even == CapacityTermImpl(0, 0, 52, 4)


def test_negative_period_fails_regardless_of_input():
    assert TrackCapacity.create_instance(GP, MD, True, True, -1.0) is FAILED_TRACK_CAPACITY
    assert TrackCapacity.create_instance(GP, MD, False, False, -0.5) is FAILED_TRACK_CAPACITY


def test_presence_flags_skip_direction():
    cap = TrackCapacity.create_instance(GP, MD, False, True, 20.0)
    assert cap.odd is WAS_NOT_MODELED
    assert cap.even == CapacityTermImpl(0, 0, 52, 4)
    cap = TrackCapacity.create_instance(GP, MD, True, False, 20.0)
    assert cap.even is WAS_NOT_MODELED


def test_zero_period_is_modeled_zero():
    cap = TrackCapacity.create_instance(GP, MD, True, True, 0.0)
    assert cap == TrackCapacityImpl(CapacityTermImpl(), CapacityTermImpl())


def test_failed_absorbs_both_orders():
    ok = TrackCapacity.create_instance(GP, MD, True, True, 20.0)
    assert FAILED_TRACK_CAPACITY + ok is FAILED_TRACK_CAPACITY
    assert ok + FAILED_TRACK_CAPACITY is FAILED_TRACK_CAPACITY
    assert FAILED_TRACK_CAPACITY + FAILED_TRACK_CAPACITY is FAILED_TRACK_CAPACITY
    assert EMPTY_TRACK_CAPACITY + FAILED_TRACK_CAPACITY is FAILED_TRACK_CAPACITY


def test_addition_is_componentwise():
    a = TrackCapacityImpl(CapacityTermImpl(1, 1, 0, 0), WAS_NOT_MODELED)
    b = TrackCapacityImpl(CapacityTermImpl(2, 0, 0, 0), CapacityTermImpl(0, 0, 3, 1))
    assert a + b == TrackCapacityImpl(CapacityTermImpl(3, 1, 0, 0), CapacityTermImpl(0, 0, 3, 1))
    assert a + b == b + a


def test_associativity_with_failure():
    a = TrackCapacityImpl(CapacityTermImpl(1, 0, 0, 0), WAS_NOT_MODELED)
    b = TrackCapacityImpl(WAS_NOT_MODELED, CapacityTermImpl(0, 2, 0, 0))
    c = TrackCapacityImpl(CapacityTermImpl(0, 0, 4, 0), CapacityTermImpl(5, 0, 0, 0))
    assert (a + b) + c == a + (b + c)
    assert (a + FAILED_TRACK_CAPACITY) + c == a + (FAILED_TRACK_CAPACITY + c) == FAILED_TRACK_CAPACITY


def test_used_capacity_from_motion_dimensions():
    cap = MD.to_track_capacity()
    assert cap == TrackCapacityImpl(CapacityTermImpl(10, 5, 0, 0), CapacityTermImpl(0, 0, 20, 4))


def test_total_capacity_fold():
    a = TrackCapacityImpl(CapacityTermImpl(1, 0, 0, 0), WAS_NOT_MODELED)
    b = TrackCapacityImpl(CapacityTermImpl(2, 0, 0, 0), CapacityTermImpl(0, 0, 1, 0))
    assert total_capacity([]) == EMPTY_TRACK_CAPACITY
    assert total_capacity([a]) == a
    assert total_capacity([a, b]) == TrackCapacityImpl(CapacityTermImpl(3, 0, 0, 0), CapacityTermImpl(0, 0, 1, 0))
    assert total_capacity([a, FAILED_TRACK_CAPACITY, b]) is FAILED_TRACK_CAPACITY


def test_negative_period_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="trackcap"):
        TrackCapacity.create_instance(GP, MD, True, True, -2.0)
    assert "Negative period" in caplog.text


def test_non_finite_period_is_a_precondition_violation():
    with pytest.raises(ValueError):
        TrackCapacity.create_instance(GP, MD, True, True, float("nan"))
    with pytest.raises(ValueError):
        TrackCapacity.create_instance(GP, MD, True, True, float("-inf"))
