#!/usr/bin/env python3
# -*- coding: utf-8 -*-

'''
Project: RF_lineup
RF Cascade Analysis Framework

This module provides essential RF components (attenuators, amplifiers, mixers, cables, filters) as Blocks.

Key Features:
- Passive devices with a noise figure equal to their loss.
- Frequency-dependent cable loss and Butterworth filter response evaluated at the signal frequency.

Date: 2026-02-08
Version: 0.2
License: MIT
'''

__version__ = "0.2"

import logging
from typing import Optional

import numpy as np
from numpy import isnan, nan, pi

from scipy.signal import butter, freqs_zpk

from .rf_blocks import Block
from .rf_conversions import linear_to_db

logger = logging.getLogger(__name__)

# ====================================================================================================
# Passive Devices
# ====================================================================================================

def passive_block(gain_db: float, name: str = "Passive") -> Block:
    '''Passive two-port described by its gain (S21) only.

    Args:
        gain_db (float): Gain in dB (negative or zero for a passive device).
        name (str): Block name, defaults to "Passive".

    Returns:
        Block: Block whose noise figure equals its loss.
    '''
    return Block(name=name, gain_db=gain_db, noise_figure_db=-gain_db)  # Noise figure equals loss for a passive device

def attenuator(att_db: float, name: str = "Attenuator") -> Block:
    '''Attenuator pad.

    Args:
        att_db (float): Attenuation in dB (positive value).
        name (str): Block name, defaults to "Attenuator".

    Returns:
        Block: Block with gain -att_db and noise figure att_db.
    '''
    return passive_block(-att_db, name=name)

def rf_cable(length_m: float, freq_hz: float, alpha: float = 5.2e-06, insertion_losses_db: float = 0,
             name: str = "RF Cable") -> Block:
    '''RF cable evaluated at the signal frequency.

    Args:
        length_m (float): Cable length in meters.
        freq_hz (float): Signal frequency in Hz.
        alpha (float): Attenuation coefficient in dB/sqrt(Hz)/m, defaults to 5.2e-06.
        insertion_losses_db (float): Fixed insertion loss in dB, defaults to 0.
        name (str): Block name, defaults to "RF Cable".

    Returns:
        Block: Passive block with the cable loss at freq_hz.
    '''
    gain_db = -insertion_losses_db - alpha * np.sqrt(freq_hz) * length_m  # Frequency-dependent loss
    return passive_block(float(gain_db), name=name)

# ====================================================================================================
# Filters
# ====================================================================================================

HIGH_PASS = 'high'
LOW_PASS  = 'low'
BAND_PASS = 'band'

def rf_filter(band_type: str, cutoff_freq: float, freq_hz: float, cutoff_freq_opt: float = nan, order: int = 1,
              insertion_losses_db: float = 0, name: str = "Filter") -> Block:
    '''Butterworth filter evaluated at the signal frequency.

    Args:
        band_type (str): Band type (HIGH_PASS 'high', LOW_PASS 'low' or BAND_PASS 'band').
        cutoff_freq (float): Cutoff frequency in Hz (1st frequency for a band-pass filter).
        freq_hz (float): Signal frequency in Hz.
        cutoff_freq_opt (float): 2nd cutoff frequency in Hz, band-pass filters only.
        order (int): Filter order, defaults to 1.
        insertion_losses_db (float): Insertion losses in dB, defaults to 0.
        name (str): Block name, defaults to "Filter".

    Returns:
        Block: Passive block with the filter response at freq_hz.

    Raises:
        ValueError: If the band type is unknown, or a band-pass filter has no cutoff_freq_opt.
    '''
    if band_type == BAND_PASS:
        if isnan(cutoff_freq_opt):
            raise ValueError("For band-pass filters, cutoff_freq_opt must be provided.")
        cutoff_freqs = sorted((cutoff_freq, cutoff_freq_opt))
        wn = [2 * pi * f for f in cutoff_freqs]
    elif band_type in (HIGH_PASS, LOW_PASS):
        wn = 2 * pi * cutoff_freq
    else:
        raise ValueError(f"Invalid band type: {band_type!r}, expected one of {HIGH_PASS!r}, {LOW_PASS!r}, {BAND_PASS!r}")

    # Analog prototype in zeros/poles/gain form, evaluated at the signal angular frequency
    z, p, k = butter(order, wn, btype=band_type, analog=True, output='zpk')
    _, h    = freqs_zpk(z, p, k, worN=[2 * pi * freq_hz])

    gain_db = float(linear_to_db(np.abs(h[0]) ** 2)) - insertion_losses_db
    nf_db   = max(0., -gain_db)  # Noise figure based on loss, capped at 0 dB (passive device)

    logger.debug(f'<{name}> {band_type}-pass, order={order}, f={freq_hz/1e9:.3f} GHz, gain={gain_db:.3f} dB')

    return Block(name=name, gain_db=gain_db, noise_figure_db=nf_db)

def high_pass_filter(cutoff_freq: float, freq_hz: float, order: int = 1, insertion_losses_db: float = 0,
                     name: str = "High-Pass Filter") -> Block:
    return rf_filter(HIGH_PASS, cutoff_freq, freq_hz, order=order, insertion_losses_db=insertion_losses_db, name=name)

def low_pass_filter(cutoff_freq: float, freq_hz: float, order: int = 1, insertion_losses_db: float = 0,
                    name: str = "Low-Pass Filter") -> Block:
    return rf_filter(LOW_PASS, cutoff_freq, freq_hz, order=order, insertion_losses_db=insertion_losses_db, name=name)

def band_pass_filter(cutoff_freq1: float, cutoff_freq2: float, freq_hz: float, order: int = 2,
                     insertion_losses_db: float = 0, name: str = "Band-Pass Filter") -> Block:
    return rf_filter(BAND_PASS, cutoff_freq1, freq_hz, cutoff_freq_opt=cutoff_freq2, order=order,
                     insertion_losses_db=insertion_losses_db, name=name)

# ====================================================================================================
# Active Devices
# ====================================================================================================

def simple_amplifier(gain_db: float, nf_db: float, op1db_dbm: Optional[float] = None,
                     oip3_dbm: Optional[float] = None, name: str = "Amplifier") -> Block:
    '''Amplifier with gain, noise figure and optional non-linearities.

    Args:
        gain_db (float): Gain in dB.
        nf_db (float): Noise figure in dB.
        op1db_dbm (Optional[float]): Output 1dB compression point in dBm.
        oip3_dbm (Optional[float]): Output IP3 in dBm.
        name (str): Block name, defaults to "Amplifier".
    '''
    return Block(name=name, gain_db=gain_db, noise_figure_db=nf_db, output_p1db_dbm=op1db_dbm, output_ip3_dbm=oip3_dbm)

def mixer(conversion_loss_db: float, nf_db: Optional[float] = None, op1db_dbm: Optional[float] = None,
          oip3_dbm: Optional[float] = None, name: str = "Mixer") -> Block:
    '''Mixer seen as a two-port: only its conversion loss and noise are modeled.

    Frequency translation is not modeled, the signal frequency passes through unchanged.

    Args:
        conversion_loss_db (float): Conversion loss in dB (positive value).
        nf_db (Optional[float]): Noise figure in dB, defaults to the conversion loss (passive mixer).
        op1db_dbm (Optional[float]): Output 1dB compression point in dBm.
        oip3_dbm (Optional[float]): Output IP3 in dBm.
        name (str): Block name, defaults to "Mixer".
    '''
    nf_db = conversion_loss_db if nf_db is None else nf_db
    return Block(name=name, gain_db=-conversion_loss_db, noise_figure_db=nf_db,
                 output_p1db_dbm=op1db_dbm, output_ip3_dbm=oip3_dbm)
