#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
RF Cascade Analysis Framework

This module provides the Input signal entering a line-up and the SignalNode state found after each stage.

Key Features:
- Friis noise factor accumulation, stage by stage.
- Independent compression of the signal path and the noise path.
- Noise temperature, OIP3 and SFDR tracking along the chain.
- Dynamic range summary at any node.

Date: 2026-02-08
Version: 0.2
License: MIT
"""

__version__ = "0.2"

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .rf_blocks import Block
from .rf_conversions import DEFAULT_INPUT_TEMP_KELVIN, K_B, THERMAL_NOISE_FLOOR_DBM_PER_HZ, db_to_linear, \
                            dbm_to_watts, linear_to_db, noise_factor_from_noise_figure, \
                            noise_figure_from_noise_factor, noise_temperature_from_noise_factor, watts_to_dbm

logger = logging.getLogger(__name__)

# ====================================================================================================
# Helpers
# ====================================================================================================

class NoisePowerAccumulator:
    """Sum of uncorrelated noise contributions.

    Contributions are given in dBm, accumulated in linear Watts and reported back in dBm.
    """

    def __init__(self) -> None:
        self.total_watts = 0.0

    def add_dbm(self, power_dbm: float) -> "NoisePowerAccumulator":
        self.total_watts += dbm_to_watts(power_dbm)
        return self

    @property
    def total_dbm(self) -> float:
        return watts_to_dbm(self.total_watts)

def output_node_name(block: Block) -> str:
    return f"{block.name} Output"

def sfdr_db(oip3_dbm: Optional[float], bandwidth_hz: float, noise_figure_db: float) -> Optional[float]:
    """Spur-free dynamic range, 2/3 * (OIP3 - noise floor).

    The noise floor is -174 dBm/Hz + 10*log10(B) + NF, i.e. referred to 290 K whatever the
    source temperature of the chain.

    Args:
        oip3_dbm (Optional[float]): Cumulative output IP3 in dBm.
        bandwidth_hz (float): Signal bandwidth in Hz.
        noise_figure_db (float): Cumulative noise figure in dB.

    Returns:
        Optional[float]: SFDR in dB, None when OIP3 is unknown.
    """
    if oip3_dbm is None:
        return None
    noise_floor_dbm = THERMAL_NOISE_FLOOR_DBM_PER_HZ + linear_to_db(bandwidth_hz) + noise_figure_db
    return 2.0 / 3.0 * (oip3_dbm - noise_floor_dbm)

def cascade_oip3_dbm(prior_oip3_dbm: float, stage_gain_db: float, stage_oip3_dbm: float) -> float:
    """Combine the OIP3 of the chain so far with the OIP3 of the next stage.

    1/OIP3_new = G_stage/OIP3_prior + 1/OIP3_stage, all in linear Watts.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        inverse_oip3 = db_to_linear(stage_gain_db) / dbm_to_watts(prior_oip3_dbm) + 1.0 / dbm_to_watts(stage_oip3_dbm)
        return watts_to_dbm(1.0 / inverse_oip3)

# ====================================================================================================
# Dynamic Range Summary
# ====================================================================================================

@dataclass(frozen=True)
class DynamicRange:
    """Dynamic range summary at a node.

    Attributes:
        linear_dr_db (float): OP1dB minus the noise power at the node, in dB.
        sfdr_db (Optional[float]): Spur-free dynamic range in dB.
        mds_dbm (float): Minimum detectable signal (noise power at the node) in dBm.
        max_input_dbm (float): Chain input power that reaches OP1dB at the node, in dBm.
    """
    linear_dr_db: float
    sfdr_db: Optional[float]
    mds_dbm: float
    max_input_dbm: float

# ====================================================================================================
# Signal Node Class
# ====================================================================================================

@dataclass(frozen=True)
class SignalNode:
    """Cascade state at the output of a stage.

    Attributes:
        name (str): "<block name> Output".
        signal_frequency_hz (float): Signal frequency in Hz (passed through every stage).
        signal_bandwidth_hz (float): Signal bandwidth in Hz (passed through every stage).
        signal_power_dbm (float): Signal power in dBm.
        noise_power_dbm (float): Noise power in the signal bandwidth in dBm.
        cumulative_noise_figure_db (float): Noise figure of the chain up to this node in dB.
        cumulative_gain_db (float): Sum of the actual (compressed) stage gains in dB.
        cumulative_noise_temperature (Optional[float]): System noise temperature in Kelvin.
        cumulative_oip3_dbm (Optional[float]): Output IP3 of the chain up to this node in dBm.
        sfdr_db (Optional[float]): Spur-free dynamic range in dB.
        output_p1db_dbm (Optional[float]): OP1dB of the stage that produced this node in dBm.
        oip3_unknown_upstream (bool): A stage without OIP3 has been crossed, cumulative OIP3 stays unknown.
    """
    name: str
    signal_frequency_hz: float
    signal_bandwidth_hz: float
    signal_power_dbm: float
    noise_power_dbm: float
    cumulative_noise_figure_db: float
    cumulative_gain_db: float
    cumulative_noise_temperature: Optional[float] = None
    cumulative_oip3_dbm: Optional[float] = None
    sfdr_db: Optional[float] = None
    output_p1db_dbm: Optional[float] = None
    oip3_unknown_upstream: bool = field(default=False, repr=False)

    @classmethod
    def default(cls) -> "SignalNode":
        """Placeholder node, only meaningful as the result of an empty cascade."""
        return cls(name="default",
                   signal_frequency_hz=0.0,
                   signal_bandwidth_hz=0.0,
                   signal_power_dbm=0.0,
                   noise_power_dbm=0.0,
                   cumulative_noise_figure_db=0.0,
                   cumulative_gain_db=0.0,
                   )

    def __str__(self) -> str:
        return (f"SignalNode {{ name: {self.name}, signal: {self.signal_power_dbm:.2f} dBm, "
                f"noise: {self.noise_power_dbm:.2f} dBm, gain: {self.cumulative_gain_db:.2f} dB, "
                f"NF: {self.cumulative_noise_figure_db:.2f} dB }}")

    # ------------------------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------------------------
    def noise_factor(self) -> float:
        return noise_factor_from_noise_figure(self.cumulative_noise_figure_db)

    def noise_temperature(self) -> float:
        """Noise temperature of the chain so far, from the cumulative noise figure (290 K reference)."""
        return noise_temperature_from_noise_factor(self.noise_factor())

    def signal_to_noise_ratio_db(self) -> float:
        return self.signal_power_dbm - self.noise_power_dbm

    def dynamic_range_db(self) -> Optional[float]:
        """OP1dB of the producing stage minus the noise power at this node, None without OP1dB."""
        if self.output_p1db_dbm is None:
            return None
        return self.output_p1db_dbm - self.noise_power_dbm

    def dynamic_range_summary(self) -> Optional[DynamicRange]:
        """Linear dynamic range, SFDR, MDS and maximum chain input power, None without OP1dB."""
        linear_dr_db = self.dynamic_range_db()
        if linear_dr_db is None:
            return None
        return DynamicRange(linear_dr_db=linear_dr_db,
                            sfdr_db=self.sfdr_db,
                            mds_dbm=self.noise_power_dbm,
                            max_input_dbm=self.output_p1db_dbm - self.cumulative_gain_db,
                            )

    # ------------------------------------------------------------------------------------------------
    # Cascade
    # ------------------------------------------------------------------------------------------------
    def cascade_block(self, block: Block) -> "SignalNode":
        """State at the output of the next block of the chain.

        Args:
            block (Block): Next stage of the line-up.

        Returns:
            SignalNode: New node, this node is left untouched.
        """
        prior_gain_linear = db_to_linear(self.cumulative_gain_db)  # Gain accumulated before this stage

        prior_noise_temperature = self.cumulative_noise_temperature
        if prior_noise_temperature is None:
            prior_noise_temperature = DEFAULT_INPUT_TEMP_KELVIN

        # Zero or infinite linear gains give nan/inf sentinels
        with np.errstate(divide='ignore', invalid='ignore'):
            # Friis: F_total = F1 + (F2 - 1)/G1 + (F3 - 1)/(G1*G2) + ..., applied one stage at a time
            cumulative_noise_factor      = self.noise_factor() + (block.noise_factor() - 1.0) / prior_gain_linear
            cumulative_noise_temperature = prior_noise_temperature + block.noise_temperature() / prior_gain_linear
        cumulative_noise_figure_db = noise_figure_from_noise_factor(cumulative_noise_factor)

        # Signal path, the actual (compressed) gain accumulates
        signal_power_dbm = block.output_power(self.signal_power_dbm)
        with np.errstate(invalid='ignore'):
            stage_power_gain   = signal_power_dbm - self.signal_power_dbm
            cumulative_gain_db = self.cumulative_gain_db + stage_power_gain

        # Noise path: incoming noise through the nominal gain (compressed on its own) plus the block's noise
        noise_from_input_dbm = block.output_power(self.noise_power_dbm)
        noise_from_block_dbm = block.output_noise_power(self.signal_bandwidth_hz)
        noise_power_dbm = NoisePowerAccumulator().add_dbm(noise_from_input_dbm).add_dbm(noise_from_block_dbm).total_dbm

        oip3_unknown_upstream = self.oip3_unknown_upstream or block.output_ip3_dbm is None
        if oip3_unknown_upstream:
            cumulative_oip3_dbm = None
        elif self.cumulative_oip3_dbm is None:
            cumulative_oip3_dbm = block.output_ip3_dbm
        else:
            cumulative_oip3_dbm = cascade_oip3_dbm(self.cumulative_oip3_dbm, block.gain_db, block.output_ip3_dbm)

        logger.debug(f"<{block.name}> stage gain: {stage_power_gain:.3f} dB, "
                     f"noise from input: {noise_from_input_dbm:.3f} dBm, noise from block: {noise_from_block_dbm:.3f} dBm, "
                     f"cumulative NF: {cumulative_noise_figure_db:.3f} dB, cumulative OIP3: {cumulative_oip3_dbm} dBm")

        return SignalNode(name=output_node_name(block),
                          signal_frequency_hz=self.signal_frequency_hz,
                          signal_bandwidth_hz=self.signal_bandwidth_hz,
                          signal_power_dbm=signal_power_dbm,
                          noise_power_dbm=noise_power_dbm,
                          cumulative_noise_figure_db=cumulative_noise_figure_db,
                          cumulative_gain_db=cumulative_gain_db,
                          cumulative_noise_temperature=cumulative_noise_temperature,
                          cumulative_oip3_dbm=cumulative_oip3_dbm,
                          sfdr_db=sfdr_db(cumulative_oip3_dbm, self.signal_bandwidth_hz, cumulative_noise_figure_db),
                          output_p1db_dbm=block.output_p1db_dbm,
                          oip3_unknown_upstream=oip3_unknown_upstream,
                          )

# ====================================================================================================
# Input Class
# ====================================================================================================

@dataclass(frozen=True)
class Input:
    """Signal entering the line-up.

    Attributes:
        frequency_hz (float): Center frequency of the signal in Hz.
        bandwidth_hz (float): Bandwidth of the signal in Hz.
        power_dbm (float): Power of the signal in dBm.
        noise_temperature_k (Optional[float]): Source noise temperature in Kelvin, 270 K when None.
    """
    frequency_hz: float
    bandwidth_hz: float
    power_dbm: float
    noise_temperature_k: Optional[float] = None

    @classmethod
    def default(cls) -> "Input":
        # A CW signal still needs a non-zero bandwidth for the noise computations
        return cls(frequency_hz=0.0, bandwidth_hz=100.0, power_dbm=0.0)

    def __str__(self) -> str:
        return f"Input {{ frequency: {self.frequency_hz}, bandwidth: {self.bandwidth_hz}, power: {self.power_dbm} }}"

    def source_temperature(self) -> float:
        return self.noise_temperature_k if self.noise_temperature_k is not None else DEFAULT_INPUT_TEMP_KELVIN

    def noise_spectral_density(self) -> float:
        """Source noise spectral density k*T in dBm/Hz."""
        return watts_to_dbm(K_B * self.source_temperature())

    def noise_power(self) -> float:
        """Source thermal noise power k*T*B in dBm."""
        return watts_to_dbm(K_B * self.source_temperature() * self.bandwidth_hz)

    def cascade_block(self, block: Block) -> SignalNode:
        """State at the output of the first block of the chain.

        Args:
            block (Block): First stage of the line-up.

        Returns:
            SignalNode: First node of the cascade.
        """
        signal_power_dbm = block.output_power(self.power_dbm)
        with np.errstate(invalid='ignore'):
            stage_power_gain = signal_power_dbm - self.power_dbm

        # No prior stage: the chain noise factor is the block's own
        cumulative_noise_figure_db = noise_figure_from_noise_factor(block.noise_factor())

        with np.errstate(divide='ignore', invalid='ignore'):
            cumulative_noise_temperature = self.source_temperature() + block.noise_temperature() / db_to_linear(stage_power_gain)

        noise_from_input_dbm = self.noise_power() + stage_power_gain
        noise_from_block_dbm = block.output_noise_power(self.bandwidth_hz)
        noise_power_dbm = NoisePowerAccumulator().add_dbm(noise_from_input_dbm).add_dbm(noise_from_block_dbm).total_dbm

        cumulative_oip3_dbm = block.output_ip3_dbm

        logger.debug(f"<{block.name}> stage gain: {stage_power_gain:.3f} dB, "
                     f"noise from input: {noise_from_input_dbm:.3f} dBm, noise from block: {noise_from_block_dbm:.3f} dBm")

        return SignalNode(name=output_node_name(block),
                          signal_frequency_hz=self.frequency_hz,
                          signal_bandwidth_hz=self.bandwidth_hz,
                          signal_power_dbm=signal_power_dbm,
                          noise_power_dbm=noise_power_dbm,
                          cumulative_noise_figure_db=cumulative_noise_figure_db,
                          cumulative_gain_db=stage_power_gain,
                          cumulative_noise_temperature=cumulative_noise_temperature,
                          cumulative_oip3_dbm=cumulative_oip3_dbm,
                          sfdr_db=sfdr_db(cumulative_oip3_dbm, self.bandwidth_hz, cumulative_noise_figure_db),
                          output_p1db_dbm=block.output_p1db_dbm,
                          oip3_unknown_upstream=cumulative_oip3_dbm is None,
                          )
