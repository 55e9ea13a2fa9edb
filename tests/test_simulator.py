import math

import numpy as np
import pytest

from simulation import (
    CellType,
    FlowSettings,
    InvalidArgument,
    LiquidSimulator,
    NotInitialized,
    OutOfRange,
    SimulationError,
    TickInProgress,
)
from simulation.solver import FlowSolver


class TestLifecycle:
    @pytest.mark.parametrize("call", [
        lambda sim: sim.tick(),
        lambda sim: sim.cell_at(1, 1),
        lambda sim: sim.add_liquid(1, 1, 1.0),
        lambda sim: sim.set_solid(1, 1),
        lambda sim: sim.set_fluid(1, 1),
        lambda sim: sim.snapshot(),
        lambda sim: sim.total_liquid(),
    ])
    def test_operations_require_initialize(self, call):
        sim = LiquidSimulator()
        assert not sim.is_initialized
        with pytest.raises(NotInitialized):
            call(sim)

    def test_not_initialized_is_a_runtime_error(self):
        with pytest.raises(RuntimeError):
            LiquidSimulator().tick()

    @pytest.mark.parametrize("size", [0, -1])
    def test_rejects_non_positive_size(self, size):
        with pytest.raises(InvalidArgument):
            LiquidSimulator().initialize(size)

    def test_reinitialize_replaces_grid(self, simulator):
        simulator.add_liquid(3, 3, 1.0)
        simulator.tick()
        old_grid = simulator.grid

        simulator.initialize(6)

        assert simulator.grid is not old_grid
        assert simulator.size == 6
        assert simulator.total_liquid() == 0.0
        assert simulator.tick_count == 0
        assert simulator.last_stats is None

    def test_tick_counts_and_records_stats(self, simulator):
        simulator.add_liquid(3, 3, 1.0)
        first = simulator.tick()
        second = simulator.tick()
        assert (first.tick, second.tick) == (1, 2)
        assert simulator.tick_count == 2
        assert simulator.last_stats is second

    def test_run_accumulates(self, simulator):
        simulator.add_liquid(3, 3, 1.0)
        total = simulator.run(5)
        assert total.tick == 5
        assert simulator.tick_count == 5
        assert total.transferred > 0


class TestEditing:
    def test_add_liquid_validates(self, simulator):
        with pytest.raises(InvalidArgument):
            simulator.add_liquid(3, 3, -1.0)
        with pytest.raises(InvalidArgument):
            simulator.add_liquid(3, 3, math.nan)
        with pytest.raises(OutOfRange):
            simulator.add_liquid(8, 3, 1.0)

    def test_errors_share_a_base_class(self, simulator):
        with pytest.raises(SimulationError):
            simulator.set_fluid(-1, 0)

    def test_add_liquid_reports_solid_target(self, simulator):
        simulator.set_solid(3, 3)
        assert simulator.add_liquid(3, 3, 1.0) is False
        assert simulator.add_liquid(4, 3, 1.0) is True

    def test_set_solid_then_fluid_round_trip(self, simulator):
        simulator.add_liquid(3, 3, 1.0)
        simulator.set_solid(3, 3)
        assert simulator.cell_at(3, 3).is_solid
        simulator.set_fluid(3, 3)
        cell = simulator.cell_at(3, 3)
        assert cell.type == CellType.FLUID
        assert cell.is_empty

    def test_edits_rejected_while_ticking(self, simulator):
        class EditingSolver(FlowSolver):
            def step(self, grid, buffer, tick=0):
                simulator.add_liquid(3, 3, 1.0)

        simulator.solver = EditingSolver()
        with pytest.raises(TickInProgress):
            simulator.tick()

        # Guard is released once the tick unwinds
        assert simulator.add_liquid(3, 3, 1.0)
        assert simulator.tick_count == 0


class TestReads:
    def test_snapshot_is_read_only_copy(self, simulator):
        simulator.add_liquid(3, 3, 1.0)
        snap = simulator.snapshot()

        with pytest.raises(ValueError):
            snap.liquid[3, 3] = 5.0

        simulator.add_liquid(3, 3, 1.0)
        assert snap.liquid[3, 3] == pytest.approx(1.0)
        assert snap.size == 8

    def test_cell_view_is_stale_after_tick(self, column):
        column.add_liquid(2, 1, 1.0)
        view = column.cell_at(2, 1)
        column.tick()
        assert view.liquid_amount == pytest.approx(1.0)
        assert column.cell_at(2, 1).liquid_amount == 0.0

    def test_total_liquid(self, simulator):
        simulator.add_liquid(2, 2, 0.5)
        simulator.add_liquid(5, 5, 1.5)
        assert simulator.total_liquid() == pytest.approx(2.0)


class TestSettings:
    @pytest.mark.parametrize("kwargs", [
        {"flow_speed": 0.0},
        {"flow_speed": 1.5},
        {"max_liquid_amount": -1.0},
        {"min_liquid_amount": 2.0},
        {"max_flow": math.inf},
        {"settle_threshold": 0},
        {"settle_threshold": 2.5},
        {"max_compression": -0.1},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(InvalidArgument):
            FlowSettings(**kwargs)

    def test_settings_reach_solver(self):
        settings = FlowSettings(settle_threshold=9)
        sim = LiquidSimulator(settings)
        assert sim.solver.settings is settings
        assert sim.settings.settle_threshold == 9

    def test_default_settings_match_constants(self):
        from simulation import config
        settings = FlowSettings()
        assert settings.max_liquid_amount == config.MAX_LIQUID_AMOUNT
        assert settings.min_liquid_amount == config.MIN_LIQUID_AMOUNT
        assert settings.settle_threshold == config.SETTLE_THRESHOLD
        assert np.isclose(settings.settle_epsilon, config.SETTLE_EPSILON)
