#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
RF Cascade Analysis Framework

This module provides an amplifier model adding AM-PM (phase distortion) characterization to a Block.

Key Features:
- AM-PM phase shift ramp above the input 1 dB compression point.
- Input backoff for a phase budget and EVM contribution of AM-PM.
- Combined AM-AM / AM-PM sweeps.

Date: 2026-02-08
Version: 0.2
License: MIT
"""

__version__ = "0.2"

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .rf_blocks import Block
from .rf_conversions import sweep_powers

logger = logging.getLogger(__name__)

# ====================================================================================================
# Amplifier Point
# ====================================================================================================

@dataclass(frozen=True)
class AmplifierPoint:
    """One point of a combined AM-AM / AM-PM sweep.

    Attributes:
        input_dbm (float): Input power in dBm.
        output_dbm (float): Output power in dBm.
        gain_db (float): Power gain in dB.
        phase_shift_deg (Optional[float]): AM-PM phase shift in degrees, None without AM-PM data.
    """
    input_dbm: float
    output_dbm: float
    gain_db: float
    phase_shift_deg: Optional[float] = None

    def __str__(self) -> str:
        phase = f"{self.phase_shift_deg:.2f}°" if self.phase_shift_deg is not None else "N/A"
        return (f"AmplifierPoint {{ Pin: {self.input_dbm:.1f} dBm, Pout: {self.output_dbm:.1f} dBm, "
                f"Gain: {self.gain_db:.1f} dB, Δφ: {phase} }}")

# ====================================================================================================
# Amplifier Model Class
# ====================================================================================================

@dataclass(frozen=True)
class AmplifierModel:
    """Amplifier model wrapping a Block with optional AM-PM characterization.

    The Block itself is never modified, the model is a separate view used for amplifier analysis
    next to the main cascade.

    Attributes:
        block (Block): Underlying stage (gain, NF, OP1dB, OIP3).
        am_pm_coefficient_deg_per_db (Optional[float]): AM-PM conversion in degrees per dB above input P1dB.
        saturation_power_dbm (Optional[float]): Saturated output power in dBm.
    """
    block: Block
    am_pm_coefficient_deg_per_db: Optional[float] = None
    saturation_power_dbm: Optional[float] = None

    @classmethod
    def with_am_pm(cls, block: Block, coeff_deg_per_db: float) -> "AmplifierModel":
        return cls(block=block, am_pm_coefficient_deg_per_db=coeff_deg_per_db)

    @classmethod
    def with_saturation(cls, block: Block, psat_dbm: float) -> "AmplifierModel":
        return cls(block=block, saturation_power_dbm=psat_dbm)

    def with_am_pm_coefficient(self, coeff_deg_per_db: float) -> "AmplifierModel":
        """Copy of the model with the AM-PM coefficient set."""
        return dataclasses.replace(self, am_pm_coefficient_deg_per_db=coeff_deg_per_db)

    def with_saturation_power(self, psat_dbm: float) -> "AmplifierModel":
        """Copy of the model with the saturated output power set."""
        return dataclasses.replace(self, saturation_power_dbm=psat_dbm)

    def phase_shift_at(self, input_power_dbm: float) -> Optional[float]:
        """AM-PM phase shift at a given input power.

        Δφ = coeff * max(0, Pin - IP1dB): zero below the input-referred P1dB, then a linear
        ramp without saturation.

        Args:
            input_power_dbm (float): Input power in dBm.

        Returns:
            Optional[float]: Phase shift in degrees, None without AM-PM coefficient or OP1dB.
        """
        input_p1db_dbm = self.block.input_p1db_dbm()
        if self.am_pm_coefficient_deg_per_db is None or input_p1db_dbm is None:
            return None
        return float(self.am_pm_coefficient_deg_per_db * np.maximum(0.0, input_power_dbm - input_p1db_dbm))  # nan input stays nan

    def backoff_for_target_phase(self, max_phase_deg: float) -> Optional[float]:
        """Input backoff from IP1dB (dB) keeping the phase shift within max_phase_deg.

        A negative backoff means the input may exceed IP1dB by that amount: with 10 °/dB and a
        5° budget, the backoff is -0.5 dB.

        Returns:
            Optional[float]: Backoff in dB, None without AM-PM coefficient or with a zero coefficient.
        """
        coeff = self.am_pm_coefficient_deg_per_db
        if coeff is None or coeff == 0.0:
            return None
        return -(max_phase_deg / coeff)

    def evm_from_am_pm(self, input_power_dbm: float) -> Optional[float]:
        """EVM ratio (not %) due to AM-PM, |sin(Δφ)| (small-angle approximation)."""
        phase_deg = self.phase_shift_at(input_power_dbm)
        if phase_deg is None:
            return None
        return float(np.abs(np.sin(np.radians(phase_deg))))

    def am_am_am_pm_sweep(self, start_dbm: float, stop_dbm: float, step_db: float) -> List[AmplifierPoint]:
        """Output power, gain and phase shift for each input power from start to stop (inclusive)."""
        points = []
        for pin in sweep_powers(start_dbm, stop_dbm, step_db):
            pout = self.block.output_power(pin)
            points.append(AmplifierPoint(input_dbm=pin,
                                         output_dbm=pout,
                                         gain_db=pout - pin,
                                         phase_shift_deg=self.phase_shift_at(pin),
                                         ))
        return points
