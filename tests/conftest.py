"""Shared test fixtures for the RF lineup tests."""

from __future__ import annotations

import pytest

from rf_lineup.rf_utils.rf_blocks import Block
from rf_lineup.rf_utils.rf_signal_nodes import Input


@pytest.fixture
def lna() -> Block:
    return Block(name="LNA", gain_db=20.0, noise_figure_db=1.5, output_p1db_dbm=5.0, output_ip3_dbm=20.0)


@pytest.fixture
def mixer() -> Block:
    return Block(name="Mixer", gain_db=-8.0, noise_figure_db=8.0, output_p1db_dbm=10.0, output_ip3_dbm=15.0)


@pytest.fixture
def if_amp() -> Block:
    return Block(name="IF Amp", gain_db=25.0, noise_figure_db=4.0, output_p1db_dbm=15.0, output_ip3_dbm=25.0)


@pytest.fixture
def receiver_chain(lna: Block, mixer: Block, if_amp: Block) -> list[Block]:
    """LNA, mixer and IF amplifier of a 6 GHz receiver."""
    return [lna, mixer, if_amp]


@pytest.fixture
def receiver_input() -> Input:
    """Weak 6 GHz signal from a cold antenna."""
    return Input(frequency_hz=6e9, bandwidth_hz=1e6, power_dbm=-80.0, noise_temperature_k=50.0)
