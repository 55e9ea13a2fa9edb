import math

import numpy as np
import pytest

from simulation.cell import CellType, Direction
from simulation.errors import InvalidArgument, OutOfRange
from simulation.grid import Grid


def test_outer_ring_is_solid_and_interior_fluid():
    grid = Grid(6)
    ring = grid.boundary_mask()
    assert np.all(grid.cell_type[ring] == CellType.SOLID)
    assert np.all(grid.cell_type[~ring] == CellType.FLUID)
    assert grid.total_liquid() == 0.0
    assert not grid.settled.any()


@pytest.mark.parametrize("size", [0, -3, 2.5, "8", True, None])
def test_rejects_bad_sizes(size):
    with pytest.raises(InvalidArgument):
        Grid(size)


def test_tiny_grids_are_all_wall():
    assert np.all(Grid(1).cell_type == CellType.SOLID)
    assert np.all(Grid(2).cell_type == CellType.SOLID)


def test_cell_at_reads_state():
    grid = Grid(5)
    grid.add_liquid(2, 3, 0.75)
    cell = grid.cell_at(2, 3)
    assert cell.type == CellType.FLUID
    assert cell.liquid_amount == pytest.approx(0.75)
    assert not cell.is_settled
    assert cell.settle_count == 0
    assert cell.flow_directions == Direction.NONE
    assert set(cell.neighbors) == {Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.UP}


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 2), (2, 5), (9, 9)])
def test_cell_at_out_of_range(x, y):
    with pytest.raises(OutOfRange):
        Grid(5).cell_at(x, y)


def test_out_of_range_is_also_an_index_error():
    with pytest.raises(IndexError):
        Grid(3).cell_at(3, 0)


def test_neighbors_absent_at_edges():
    grid = Grid(4)
    assert grid.neighbors(0, 0) == {Direction.DOWN: (0, 1), Direction.RIGHT: (1, 0)}
    assert set(grid.neighbors(3, 1)) == {Direction.DOWN, Direction.LEFT, Direction.UP}
    assert grid.neighbors(1, 1) == {
        Direction.DOWN: (1, 2),
        Direction.LEFT: (0, 1),
        Direction.RIGHT: (2, 1),
        Direction.UP: (1, 0),
    }
    corner = grid.cell_at(3, 3)
    assert not corner.has_neighbor(Direction.DOWN)
    assert not corner.has_neighbor(Direction.RIGHT)


def test_add_liquid_accumulates_and_wakes():
    grid = Grid(5)
    grid.settled[2, 2] = True
    grid.settle_count[2, 2] = 4
    assert grid.add_liquid(2, 2, 0.5)
    assert grid.add_liquid(2, 2, 0.25)
    assert grid.liquid[2, 2] == pytest.approx(0.75)
    assert not grid.settled[2, 2]
    assert grid.settle_count[2, 2] == 0


@pytest.mark.parametrize("amount", [-0.1, math.nan, math.inf, -math.inf, "lots", None])
def test_add_liquid_rejects_bad_amounts(amount):
    grid = Grid(5)
    with pytest.raises(InvalidArgument):
        grid.add_liquid(2, 2, amount)
    assert grid.total_liquid() == 0.0


def test_add_liquid_to_solid_is_ignored():
    grid = Grid(5)
    grid.set_solid(2, 2)
    assert grid.add_liquid(2, 2, 1.0) is False
    assert grid.liquid[2, 2] == 0.0


def test_edits_on_outer_wall():
    grid = Grid(5)
    with pytest.raises(OutOfRange):
        grid.add_liquid(0, 2, 1.0)
    with pytest.raises(OutOfRange):
        grid.set_fluid(4, 4)
    grid.set_solid(0, 0)  # already wall
    assert grid.cell_type[0, 0] == CellType.SOLID


def test_set_solid_removes_liquid_and_wakes_neighbors():
    grid = Grid(5)
    grid.add_liquid(2, 2, 1.0)
    grid.settled[:, :] = True
    grid.flow_flags[2, 2] = int(Direction.DOWN)

    grid.set_solid(2, 2)

    assert grid.cell_type[2, 2] == CellType.SOLID
    assert grid.liquid[2, 2] == 0.0
    assert grid.flow_flags[2, 2] == 0
    for x, y in [(2, 2), (1, 2), (3, 2), (2, 1), (2, 3)]:
        assert not grid.settled[x, y]
    # Diagonal neighbours are untouched
    assert grid.settled[1, 1]


def test_set_fluid_carves_empty_cavity():
    grid = Grid(5)
    grid.set_solid(2, 2)
    grid.set_fluid(2, 2)
    cell = grid.cell_at(2, 2)
    assert cell.type == CellType.FLUID
    assert cell.liquid_amount == 0.0
    assert not cell.is_settled


def test_set_fluid_on_fluid_cell_empties_it():
    grid = Grid(5)
    grid.add_liquid(1, 1, 2.0)
    grid.set_fluid(1, 1)
    assert grid.liquid[1, 1] == 0.0


def test_wake_covers_cross_neighbourhood():
    grid = Grid(6)
    grid.settled[:, :] = True
    grid.settle_count[:, :] = 3
    mask = np.zeros(grid.shape, dtype=bool)
    mask[2, 3] = True

    grid.wake(mask)

    woken = ~grid.settled
    expected = np.zeros(grid.shape, dtype=bool)
    for x, y in [(2, 3), (1, 3), (3, 3), (2, 2), (2, 4)]:
        expected[x, y] = True
    np.testing.assert_array_equal(woken, expected)
    assert np.all(grid.settle_count[expected] == 0)
    assert np.all(grid.settle_count[~expected] == 3)
