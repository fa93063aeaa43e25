import pytest

from elevatorsim import Building


@pytest.fixture
def four_floor_building() -> Building:
    return Building(num_floors=4, num_cars=1, arrival_rate=0.5)
