#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
RF Cascade Analysis Framework

This module provides the Block, the two-port stage of an RF line-up (amplifier, attenuator, filter, mixer).

Key Features:
- Single-stage noise characterization (noise factor, noise temperature, added noise power).
- Hard-clamp compression model around the output 1 dB compression point.
- Dynamic range, AM-AM / gain compression sweeps and two-tone IMD3 metrics.

Date: 2026-02-08
Version: 0.2
License: MIT
"""

__version__ = "0.2"

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .rf_conversions import K_B, P1DB_CLAMP_MARGIN_DB, REFERENCE_TEMP_KELVIN, noise_factor_from_noise_figure, \
                            noise_temperature_from_noise_factor, sweep_powers, thermal_noise_power_dbm, watts_to_dbm

logger = logging.getLogger(__name__)

# ====================================================================================================
# IMD3 Point
# ====================================================================================================

@dataclass(frozen=True)
class Imd3Point:
    """One point of a two-tone IMD3 sweep.

    Attributes:
        input_dbm (float): Input power per tone in dBm.
        output_dbm (float): Output power per tone in dBm.
        imd3_dbm (float): Third-order intermodulation product power in dBm.
        rejection_db (float): Carrier to IM3 ratio in dB.
    """
    input_dbm: float
    output_dbm: float
    imd3_dbm: float
    rejection_db: float

# ====================================================================================================
# Block Class
# ====================================================================================================

@dataclass(frozen=True)
class Block:
    """Two-port stage of an RF line-up.

    Every method is a pure query: a Block never changes after construction.

    Attributes:
        name (str): Label of the stage, used to name its output node.
        gain_db (float): Small-signal gain in dB (negative for a loss).
        noise_figure_db (float): Noise figure in dB.
        output_p1db_dbm (Optional[float]): Output 1 dB compression point in dBm, None for an ideal linear stage.
        output_ip3_dbm (Optional[float]): Output third-order intercept point in dBm.
    """
    name: str
    gain_db: float
    noise_figure_db: float
    output_p1db_dbm: Optional[float] = None
    output_ip3_dbm: Optional[float] = None

    @classmethod
    def default(cls) -> "Block":
        """Unity-gain, noiseless, linear block."""
        return cls(name="default", gain_db=0.0, noise_figure_db=0.0)

    # ------------------------------------------------------------------------------------------------
    # Noise
    # ------------------------------------------------------------------------------------------------
    def noise_factor(self) -> float:
        """Linear noise factor, F = 10^(NF/10)."""
        return noise_factor_from_noise_figure(self.noise_figure_db)

    def noise_temperature(self) -> float:
        """Equivalent noise temperature in Kelvin, always referred to 290 K."""
        return noise_temperature_from_noise_factor(self.noise_factor())

    def input_noise_power(self, bandwidth_hz: float) -> float:
        """Noise added by the block, referred to its input.

        Args:
            bandwidth_hz (float): Noise bandwidth in Hz.

        Returns:
            float: (F - 1) * k * 290 K * B in dBm, -inf for a zero bandwidth.
        """
        with np.errstate(invalid='ignore'):
            return watts_to_dbm((self.noise_factor() - 1.0) * K_B * REFERENCE_TEMP_KELVIN * bandwidth_hz)

    def output_noise_power(self, bandwidth_hz: float) -> float:
        """Noise added by the block, referred to its output (same compression as the signal)."""
        return self.output_power(self.input_noise_power(bandwidth_hz))

    def output_noise_floor_dbm(self, bandwidth_hz: float) -> float:
        """Thermal noise floor at the output: kT0B + NF + gain in dBm."""
        return thermal_noise_power_dbm(REFERENCE_TEMP_KELVIN, bandwidth_hz) + self.noise_figure_db + self.gain_db

    # ------------------------------------------------------------------------------------------------
    # Compression
    # ------------------------------------------------------------------------------------------------
    def output_power(self, input_power_dbm: float) -> float:
        """Output power for a given input power.

        The block is linear up to OP1dB + 1 dB where the output is hard-clamped. This stands
        in for a piecewise compression curve (linear, compression and saturation regions).

        Args:
            input_power_dbm (float): Input power in dBm.

        Returns:
            float: Output power in dBm.
        """
        with np.errstate(invalid='ignore'):
            output_power_without_compression = input_power_dbm + self.gain_db
        if self.output_p1db_dbm is not None:
            clamp_dbm = self.output_p1db_dbm + P1DB_CLAMP_MARGIN_DB
            if output_power_without_compression > clamp_dbm:
                return clamp_dbm
        return output_power_without_compression

    def power_gain(self, input_power_dbm: float) -> float:
        """Actual (possibly compressed) gain in dB at a given input power."""
        return self.output_power(input_power_dbm) - input_power_dbm

    def input_p1db_dbm(self) -> Optional[float]:
        """Input-referred 1 dB compression point (OP1dB - small-signal gain)."""
        if self.output_p1db_dbm is None:
            return None
        return self.output_p1db_dbm - self.gain_db

    def input_ip3_dbm(self) -> Optional[float]:
        """Input-referred third-order intercept point (OIP3 - small-signal gain)."""
        if self.output_ip3_dbm is None:
            return None
        return self.output_ip3_dbm - self.gain_db

    # ------------------------------------------------------------------------------------------------
    # Dynamic range
    # ------------------------------------------------------------------------------------------------
    def dynamic_range_db(self, bandwidth_hz: float) -> Optional[float]:
        """Output-referred dynamic range: OP1dB minus the output noise floor.

        Args:
            bandwidth_hz (float): Noise bandwidth in Hz.

        Returns:
            Optional[float]: Dynamic range in dB, None when no OP1dB is defined.
        """
        if self.output_p1db_dbm is None:
            return None
        return self.output_p1db_dbm - self.output_noise_floor_dbm(bandwidth_hz)

    def input_dynamic_range_db(self, bandwidth_hz: float) -> Optional[float]:
        """Input-referred dynamic range: IP1dB minus the input noise floor (kT0B + NF)."""
        input_p1db_dbm = self.input_p1db_dbm()
        if input_p1db_dbm is None:
            return None
        input_noise_floor_dbm = thermal_noise_power_dbm(REFERENCE_TEMP_KELVIN, bandwidth_hz) + self.noise_figure_db
        return input_p1db_dbm - input_noise_floor_dbm

    # ------------------------------------------------------------------------------------------------
    # AM-AM and gain compression curves
    # ------------------------------------------------------------------------------------------------
    def am_am_curve(self, input_powers_dbm: Iterable[float]) -> List[Tuple[float, float]]:
        """(input power, output power) pairs in dBm for the given input powers."""
        return [(pin, self.output_power(pin)) for pin in input_powers_dbm]

    def am_am_sweep(self, start_dbm: float, stop_dbm: float, step_db: float) -> List[Tuple[float, float]]:
        """AM-AM curve from start to stop (inclusive) in step increments."""
        return self.am_am_curve(sweep_powers(start_dbm, stop_dbm, step_db))

    def gain_compression_curve(self, input_powers_dbm: Iterable[float]) -> List[Tuple[float, float]]:
        """(input power in dBm, gain in dB) pairs for the given input powers."""
        return [(pin, self.power_gain(pin)) for pin in input_powers_dbm]

    def gain_compression_sweep(self, start_dbm: float, stop_dbm: float, step_db: float) -> List[Tuple[float, float]]:
        return self.gain_compression_curve(sweep_powers(start_dbm, stop_dbm, step_db))

    # ------------------------------------------------------------------------------------------------
    # Intermodulation
    # ------------------------------------------------------------------------------------------------
    def imd3_output_power_dbm(self, input_power_dbm: float) -> Optional[float]:
        """Output IM3 power of a two-tone test, IM3 = 3 * Pout - 2 * OIP3.

        Args:
            input_power_dbm (float): Input power per tone in dBm.

        Returns:
            Optional[float]: IM3 power in dBm, None when no OIP3 is defined.
        """
        if self.output_ip3_dbm is None:
            return None
        return 3.0 * self.output_power(input_power_dbm) - 2.0 * self.output_ip3_dbm

    def imd3_rejection_db(self, input_power_dbm: float) -> Optional[float]:
        """Carrier to IM3 ratio, 2 * (OIP3 - Pout), None when no OIP3 is defined."""
        imd3_dbm = self.imd3_output_power_dbm(input_power_dbm)
        if imd3_dbm is None:
            return None
        return self.output_power(input_power_dbm) - imd3_dbm

    def imd3_sweep(self, start_dbm: float, stop_dbm: float, step_db: float) -> List[Imd3Point]:
        """IMD3 metrics for each swept input power, empty when no OIP3 is defined."""
        if self.output_ip3_dbm is None:
            return []

        points = []
        for pin in sweep_powers(start_dbm, stop_dbm, step_db):
            pout     = self.output_power(pin)
            imd3_dbm = 3.0 * pout - 2.0 * self.output_ip3_dbm
            points.append(Imd3Point(input_dbm=pin, output_dbm=pout, imd3_dbm=imd3_dbm, rejection_db=pout - imd3_dbm))
        return points
