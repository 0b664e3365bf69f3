#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
RF Cascade Analysis Framework

This module provides the unit conversions and physical constants shared by the cascade engine.

Key Features:
- dB <-> linear and dBm <-> Watts conversions.
- Noise figure <-> noise factor <-> noise temperature conversions (IEEE 290 K reference).
- Thermal noise power (kTB) and inclusive power sweep grids.

Date: 2026-02-08
Version: 0.2
License: MIT
"""

__version__ = "0.2"

import logging
from typing import List, Sequence, Tuple, Union

import numpy as np
from scipy.constants import k as K_B  # Boltzmann constant in Joules per Kelvin (1.380649e-23)

logger = logging.getLogger(__name__)

# ====================================================================================================
# Constants
# ====================================================================================================

# Temperatures
REFERENCE_TEMP_KELVIN     = 290.0  # IEEE reference temperature for noise figure <-> temperature conversions
DEFAULT_INPUT_TEMP_KELVIN = 270.0  # Source noise temperature used when an Input does not provide one

# Noise floor of a matched load at 290 K
THERMAL_NOISE_FLOOR_DBM_PER_HZ = -174.0

# Compression and sweeps
P1DB_CLAMP_MARGIN_DB = 1.0   # Output power is hard-clamped at OP1dB + 1 dB
SWEEP_STOP_TOLERANCE = 0.01  # Fraction of the step added to the stop bound of a sweep

# ====================================================================================================
# Power Conversions
# ====================================================================================================

def db_to_linear(value_db: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert a power ratio from dB to linear scale.

    Args:
        value_db (Union[float, np.ndarray]): Power ratio in dB.

    Returns:
        Union[float, np.ndarray]: Linear power ratio.
    """
    return np.power(10.0, np.asarray(value_db, dtype=float) / 10.0)[()]  # G = 10^(dB/10)

def linear_to_db(value: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert a linear power ratio to dB.

    A ratio of 0 gives -inf, which callers treat as a valid sentinel.

    Args:
        value (Union[float, np.ndarray]): Linear power ratio.

    Returns:
        Union[float, np.ndarray]: Power ratio in dB.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return (10.0 * np.log10(np.asarray(value, dtype=float)))[()]

def dbm_to_watts(power_dbm: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert power from dBm to watts.

    Args:
        power_dbm (Union[float, np.ndarray]): Power in dBm (decibels relative to 1 milliwatt).

    Returns:
        Union[float, np.ndarray]: Power in watts.
    """
    return db_to_linear(power_dbm) / 1000  # Convert dBm to milliwatts, then to watts

def watts_to_dbm(power_watts: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert power from watts to dBm.

    Args:
        power_watts (Union[float, np.ndarray]): Power in watts (scalar or array).

    Returns:
        Union[float, np.ndarray]: Power in dBm, -inf for 0 W.
    """
    return linear_to_db(np.asarray(power_watts, dtype=float) * 1000)  # dBm = 10 * log10(P * 1000)

# ====================================================================================================
# Noise Conversions
# ====================================================================================================

def noise_factor_from_noise_figure(noise_figure_db: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise figure (dB) to noise factor (linear), F = 10^(NF/10)."""
    return db_to_linear(noise_figure_db)

def noise_figure_from_noise_factor(noise_factor: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise factor (linear) to noise figure (dB)."""
    return linear_to_db(noise_factor)

def noise_temperature_from_noise_factor(noise_factor: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise factor to equivalent noise temperature, T = 290 K * (F - 1).

    Args:
        noise_factor (Union[float, np.ndarray]): Linear noise factor.

    Returns:
        Union[float, np.ndarray]: Noise temperature in Kelvin.
    """
    return REFERENCE_TEMP_KELVIN * (noise_factor - 1.0)

def noise_temperature_from_noise_figure(noise_figure_db: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise figure (dB) to equivalent noise temperature (K)."""
    return noise_temperature_from_noise_factor(noise_factor_from_noise_figure(noise_figure_db))

def noise_factor_from_noise_temperature(temp_kelvin: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise temperature (K) to noise factor, F = 1 + T / 290 K."""
    return 1.0 + np.asarray(temp_kelvin, dtype=float)[()] / REFERENCE_TEMP_KELVIN

def noise_figure_from_noise_temperature(temp_kelvin: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Convert noise temperature (K) to noise figure (dB)."""
    return noise_figure_from_noise_factor(noise_factor_from_noise_temperature(temp_kelvin))

def thermal_noise_power_dbm(temp_kelvin: float, bw_hz: float) -> float:
    """Calculate thermal noise power in dBm based on temperature and bandwidth.

    Args:
        temp_kelvin (float): Temperature in Kelvin.
        bw_hz (float): Bandwidth in Hertz.

    Returns:
        float: Thermal noise power in dBm (-inf for a zero bandwidth).
    """
    return watts_to_dbm(K_B * temp_kelvin * bw_hz)  # P = K_B * T * B, then convert to dBm

def cascade_noise_figure(stages: Sequence[Tuple[float, float]]) -> float:
    """Noise figure of a chain computed with the closed-form Friis formula.

    F_total = F1 + (F2 - 1)/G1 + (F3 - 1)/(G1*G2) + ...

    Args:
        stages (Sequence[Tuple[float, float]]): (noise_figure_db, gain_db) for each stage, in order.

    Returns:
        float: Cascaded noise figure in dB (0 dB for an empty chain).
    """
    total_noise_factor = 1.0
    preceding_gain     = 1.0

    for noise_figure_db, gain_db in stages:
        total_noise_factor += (noise_factor_from_noise_figure(noise_figure_db) - 1.0) / preceding_gain
        preceding_gain     *= db_to_linear(gain_db)

    return noise_figure_from_noise_factor(total_noise_factor)

# ====================================================================================================
# Sweeps
# ====================================================================================================

def sweep_powers(start_dbm: float, stop_dbm: float, step_db: float) -> List[float]:
    """Input powers from start to stop (inclusive) in step increments.

    The stop bound is extended by a small fraction of the step so that a stop value reached
    by the stepping is always included.

    Args:
        start_dbm (float): First power in dBm.
        stop_dbm (float): Last power in dBm.
        step_db (float): Increment in dB.

    Returns:
        List[float]: Swept powers, empty when start is above stop.
    """
    if step_db <= 0:
        logger.warning(f"Non-positive sweep step ({step_db} dB), sweeping the start power only")
        return [float(start_dbm)] if start_dbm <= stop_dbm else []

    n_steps = np.floor((stop_dbm - start_dbm) / step_db + SWEEP_STOP_TOLERANCE)
    if not np.isfinite(n_steps) or n_steps < 0:
        return []

    n_points = int(n_steps) + 1
    if n_points == 1:
        return [float(start_dbm)]  # An infinite step must not produce start + 0 * inf
    return [float(start_dbm + idx * step_db) for idx in range(n_points)]
