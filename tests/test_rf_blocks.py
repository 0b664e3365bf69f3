"""Tests for the single-stage Block characterization."""

from __future__ import annotations

import dataclasses
import math

import pytest

from rf_lineup.rf_utils.rf_blocks import Block, Imd3Point
from rf_lineup.rf_utils.rf_conversions import linear_to_db, thermal_noise_power_dbm


@pytest.fixture
def compressing_amp() -> Block:
    return Block(name="Amp", gain_db=20.0, noise_figure_db=3.0, output_p1db_dbm=10.0)


@pytest.fixture
def linear_amp() -> Block:
    return Block(name="Linear Amp", gain_db=20.0, noise_figure_db=3.0, output_ip3_dbm=30.0)


class TestBlockBasics:
    def test_default(self) -> None:
        block = Block.default()
        assert block.gain_db == 0.0
        assert block.noise_figure_db == 0.0
        assert block.output_p1db_dbm is None
        assert block.output_ip3_dbm is None

    def test_is_immutable(self, compressing_amp: Block) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            compressing_amp.gain_db = 10.0  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert Block("A", 10.0, 2.0) == Block("A", 10.0, 2.0)

    def test_input_referred_points(self) -> None:
        block = Block(name="Amp", gain_db=20.0, noise_figure_db=3.0, output_p1db_dbm=10.0, output_ip3_dbm=30.0)
        assert block.input_p1db_dbm() == pytest.approx(-10.0)
        assert block.input_ip3_dbm() == pytest.approx(10.0)
        assert Block.default().input_p1db_dbm() is None
        assert Block.default().input_ip3_dbm() is None


class TestBlockNoise:
    def test_noise_factor_and_temperature(self) -> None:
        block = Block(name="Amp", gain_db=10.0, noise_figure_db=10.0 * math.log10(2.0))
        assert block.noise_factor() == pytest.approx(2.0)
        assert block.noise_temperature() == pytest.approx(290.0)

    def test_input_noise_power(self, compressing_amp: Block) -> None:
        expected_dbm = thermal_noise_power_dbm(290.0, 1e6) + linear_to_db(compressing_amp.noise_factor() - 1.0)
        assert compressing_amp.input_noise_power(1e6) == pytest.approx(expected_dbm)

    def test_zero_bandwidth_is_minus_inf(self, compressing_amp: Block) -> None:
        assert compressing_amp.input_noise_power(0.0) == -math.inf
        assert compressing_amp.output_noise_power(0.0) == -math.inf

    def test_noiseless_block_adds_no_noise(self) -> None:
        assert Block.default().input_noise_power(1e6) == -math.inf

    def test_output_noise_power_follows_gain(self, compressing_amp: Block) -> None:
        assert compressing_amp.output_noise_power(1e6) == pytest.approx(compressing_amp.input_noise_power(1e6) + 20.0)

    def test_output_noise_floor(self, compressing_amp: Block) -> None:
        assert compressing_amp.output_noise_floor_dbm(1e6) == pytest.approx(-113.98 + 3.0 + 20.0, abs=0.01)


class TestBlockCompression:
    def test_clamp(self, compressing_amp: Block) -> None:
        assert compressing_amp.output_power(0.0) == 11.0
        assert compressing_amp.power_gain(0.0) == 11.0

    def test_linear_below_clamp(self, compressing_amp: Block) -> None:
        assert compressing_amp.output_power(-30.0) == pytest.approx(-10.0)
        assert compressing_amp.power_gain(-30.0) == pytest.approx(20.0)

    def test_clamp_edge(self, compressing_amp: Block) -> None:
        assert compressing_amp.output_power(-9.0) == pytest.approx(11.0)
        assert compressing_amp.output_power(50.0) == pytest.approx(11.0)

    def test_no_p1db_is_linear(self, linear_amp: Block) -> None:
        assert linear_amp.output_power(50.0) == pytest.approx(70.0)

    def test_deterministic(self, compressing_amp: Block) -> None:
        results = {compressing_amp.output_power(-12.345) for _ in range(10)}
        assert len(results) == 1


class TestBlockDynamicRange:
    def test_output_dynamic_range(self, compressing_amp: Block) -> None:
        assert compressing_amp.dynamic_range_db(1e6) == pytest.approx(100.98, abs=0.01)

    def test_input_dynamic_range(self, compressing_amp: Block) -> None:
        assert compressing_amp.input_dynamic_range_db(1e6) == pytest.approx(100.98, abs=0.01)

    def test_without_p1db(self, linear_amp: Block) -> None:
        assert linear_amp.dynamic_range_db(1e6) is None
        assert linear_amp.input_dynamic_range_db(1e6) is None


class TestBlockCurves:
    def test_am_am_sweep(self, compressing_amp: Block) -> None:
        assert compressing_amp.am_am_sweep(-20.0, 0.0, 10.0) == [(-20.0, 0.0), (-10.0, 10.0), (0.0, 11.0)]

    def test_gain_compression_sweep(self, compressing_amp: Block) -> None:
        assert compressing_amp.gain_compression_sweep(-20.0, 0.0, 10.0) == [(-20.0, 20.0), (-10.0, 20.0), (0.0, 11.0)]

    def test_curves_on_explicit_powers(self, compressing_amp: Block) -> None:
        assert compressing_amp.am_am_curve([-50.0]) == [(-50.0, -30.0)]
        assert compressing_amp.gain_compression_curve([]) == []

    def test_gain_never_increases_with_drive(self, compressing_amp: Block) -> None:
        gains = [gain for _, gain in compressing_amp.gain_compression_sweep(-40.0, 10.0, 0.5)]
        assert all(later <= earlier for earlier, later in zip(gains, gains[1:]))


class TestBlockImd3:
    def test_imd3_and_rejection(self, linear_amp: Block) -> None:
        assert linear_amp.imd3_output_power_dbm(-30.0) == pytest.approx(-90.0)
        assert linear_amp.imd3_rejection_db(-30.0) == pytest.approx(80.0)

    @pytest.mark.parametrize("pin", [-60.0, -30.0, -5.5, 0.0])
    def test_three_to_one_slope(self, linear_amp: Block, pin: float) -> None:
        slope = linear_amp.imd3_output_power_dbm(pin + 1.0) - linear_amp.imd3_output_power_dbm(pin)
        assert slope == pytest.approx(3.0, abs=0.01)

    def test_rejection_is_twice_the_distance_to_oip3(self, linear_amp: Block) -> None:
        pout = linear_amp.output_power(-25.0)
        assert linear_amp.imd3_rejection_db(-25.0) == pytest.approx(2.0 * (30.0 - pout))

    def test_imd3_sweep(self, linear_amp: Block) -> None:
        points = linear_amp.imd3_sweep(-30.0, -28.0, 1.0)
        assert len(points) == 3
        assert points[0] == Imd3Point(input_dbm=-30.0, output_dbm=-10.0, imd3_dbm=-90.0, rejection_db=80.0)
        assert points[-1].input_dbm == pytest.approx(-28.0)

    def test_without_oip3(self, compressing_amp: Block) -> None:
        assert compressing_amp.imd3_output_power_dbm(-30.0) is None
        assert compressing_amp.imd3_rejection_db(-30.0) is None
        assert compressing_amp.imd3_sweep(-30.0, -20.0, 1.0) == []
