from elevatorsim import Occupant

from .helpers import ScriptedRandom, make_occupant


def test_create_starts_on_ground_with_uniform_destination():
    occupant = Occupant.create(0.1, num_floors=5, rng=ScriptedRandom(floors=[4]), occupant_id=7)
    assert occupant.current_floor == 0
    assert occupant.destination_floor == 4
    assert occupant.departure_probability == 0.1
    assert occupant.occupant_id == 7
    assert occupant.waiting
    assert occupant.wait_time == 0


def test_waiting_requires_not_riding():
    occupant = make_occupant(0, 2)
    assert occupant.waiting
    occupant.board()
    assert not occupant.waiting
    occupant.current_floor = 2
    occupant.resolve_arrival()
    assert not occupant.waiting


def test_sample_departure_sends_occupant_home():
    occupant = make_occupant(3, 3)
    assert occupant.sample_departure(ScriptedRandom(bernoullis=[True]))
    assert occupant.leaving
    assert occupant.destination_floor == 0
    assert occupant.waiting


def test_sample_departure_can_decline():
    occupant = make_occupant(3, 3)
    assert not occupant.sample_departure(ScriptedRandom(bernoullis=[False]))
    assert not occupant.leaving
    assert occupant.destination_floor == 3


def test_leaving_is_sticky_and_draws_nothing():
    occupant = make_occupant(2, 2)
    occupant.sample_departure(ScriptedRandom(bernoullis=[True]))
    rng = ScriptedRandom(bernoullis=[False])
    assert occupant.sample_departure(rng)
    assert occupant.leaving
    assert occupant.destination_floor == 0
    assert list(rng.bernoullis) == [False]


def test_tick_and_resolve_arrival():
    occupant = make_occupant(0, 3)
    for _ in range(4):
        occupant.tick()
    assert occupant.wait_time == 4
    occupant.board()
    occupant.current_floor = 3
    occupant.resolve_arrival()
    assert occupant.wait_time == 0
    assert not occupant.riding


def test_occupants_are_identity_hashed():
    a = make_occupant(1, 2)
    b = make_occupant(1, 2)
    assert a != b
    assert len({a, b}) == 2
