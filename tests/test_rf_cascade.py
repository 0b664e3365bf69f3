"""Tests for the cascade drivers."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from rf_lineup.rf_utils.rf_blocks import Block
from rf_lineup.rf_utils.rf_cascade import (
    cascade_am_am_sweep,
    cascade_gain_compression_sweep,
    cascade_input_power_sweep,
    cascade_output_power,
    cascade_vector_return_output,
    cascade_vector_return_vector,
)
from rf_lineup.rf_utils.rf_signal_nodes import Input, SignalNode


class TestLineUp:
    def test_end_to_end_receiver(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        node = cascade_vector_return_output(receiver_input, receiver_chain)
        assert node.cumulative_gain_db == pytest.approx(37.0, abs=1.0)
        assert node.cumulative_noise_figure_db < 5.0
        assert node.signal_to_noise_ratio_db() > 0.0
        assert node.cumulative_oip3_dbm is not None
        assert node.sfdr_db is not None
        assert node.name == "IF Amp Output"

    def test_vector_has_one_node_per_block(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        nodes = cascade_vector_return_vector(receiver_input, receiver_chain)
        assert [node.name for node in nodes] == ["LNA Output", "Mixer Output", "IF Amp Output"]

    def test_prefix_consistency(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        nodes = cascade_vector_return_vector(receiver_input, receiver_chain)
        for n in range(1, len(receiver_chain) + 1):
            assert nodes[n - 1] == cascade_vector_return_output(receiver_input, receiver_chain[:n])

    def test_passive_chain(self) -> None:
        blocks = [Block(f"Loss {loss} dB", -loss, loss) for loss in (3.0, 1.0, 2.0)]
        node = cascade_vector_return_output(Input(1e9, 1e6, -30.0, 290.0), blocks)
        assert node.cumulative_noise_figure_db == pytest.approx(6.0, abs=1e-6)
        assert node.cumulative_gain_db == pytest.approx(-6.0)

    def test_repeated_cascades_are_identical(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        first = cascade_vector_return_output(receiver_input, receiver_chain)
        second = cascade_vector_return_output(receiver_input, receiver_chain)
        assert first == second

    def test_empty_chain(self, receiver_input: Input, caplog: pytest.LogCaptureFixture) -> None:
        assert cascade_vector_return_vector(receiver_input, []) == []
        with caplog.at_level(logging.WARNING):
            assert cascade_vector_return_output(receiver_input, []) == SignalNode.default()
        assert "Empty block list" in caplog.text


class TestSweeps:
    def test_output_power(self, receiver_chain: list[Block]) -> None:
        assert cascade_output_power(receiver_chain, -80.0) == pytest.approx(-43.0)
        assert cascade_output_power([], -80.0) == -80.0

    def test_am_am_sweep(self, receiver_chain: list[Block]) -> None:
        curve = cascade_am_am_sweep(receiver_chain, -80.0, -20.0, 10.0)
        assert len(curve) == 7
        assert curve[0] == pytest.approx((-80.0, -43.0))
        # IF amplifier clamps at OP1dB + 1 dB
        assert curve[-1] == pytest.approx((-20.0, 16.0))

    def test_gain_compression_sweep(self, receiver_chain: list[Block]) -> None:
        gains = cascade_gain_compression_sweep(receiver_chain, -80.0, -20.0, 10.0)
        assert gains[0] == pytest.approx((-80.0, 37.0))
        assert gains[-1] == pytest.approx((-20.0, 36.0))

    def test_input_power_sweep(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        outputs = cascade_input_power_sweep(receiver_input, receiver_chain, -80.0, -20.0, 10.0)
        assert len(outputs) == 7
        for power_dbm, node in zip([-80.0, -70.0, -60.0, -50.0, -40.0, -30.0, -20.0], outputs):
            swept_input = dataclasses.replace(receiver_input, power_dbm=power_dbm)
            assert node == cascade_vector_return_output(swept_input, receiver_chain)
        assert receiver_input.power_dbm == -80.0

    def test_input_power_sweep_with_progress(self, receiver_input: Input, receiver_chain: list[Block]) -> None:
        outputs = cascade_input_power_sweep(receiver_input, receiver_chain, -80.0, -79.0, 1.0, progress=True)
        assert len(outputs) == 2
