#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
RF Cascade Analysis Framework

This module folds an Input through an ordered list of Blocks to build the line-up of a chain.

Key Features:
- Final node or full node-by-node line-up of a chain.
- Signal-only AM-AM and gain compression sweeps of a whole chain.
- Full cascade re-evaluated over a range of input powers.

Date: 2026-02-08
Version: 0.2
License: MIT
"""

__version__ = "0.2"

import dataclasses
import logging
from typing import List, Sequence, Tuple

from tqdm import tqdm

from .rf_blocks import Block
from .rf_conversions import sweep_powers
from .rf_signal_nodes import Input, SignalNode

logger = logging.getLogger(__name__)

# ====================================================================================================
# Line-up
# ====================================================================================================

def cascade_vector_return_vector(input_signal: Input, blocks: Sequence[Block]) -> List[SignalNode]:
    """Cascade the input through every block and keep the node found after each of them.

    Element n of the result is the output of cascade_vector_return_output(input_signal, blocks[:n+1]).

    Args:
        input_signal (Input): Signal entering the chain.
        blocks (Sequence[Block]): Stages of the chain, in order.

    Returns:
        List[SignalNode]: One node per block, empty for an empty chain.
    """
    nodes: List[SignalNode] = []
    for block in blocks:
        if not nodes:
            nodes.append(input_signal.cascade_block(block))
        else:
            nodes.append(nodes[-1].cascade_block(block))
    return nodes

def cascade_vector_return_output(input_signal: Input, blocks: Sequence[Block]) -> SignalNode:
    """Cascade the input through every block and return the node at the end of the chain.

    An empty chain has no meaningful output: SignalNode.default() is returned.

    Args:
        input_signal (Input): Signal entering the chain.
        blocks (Sequence[Block]): Stages of the chain, in order.

    Returns:
        SignalNode: Node at the output of the last block.
    """
    nodes = cascade_vector_return_vector(input_signal, blocks)
    if not nodes:
        logger.warning("Empty block list, returning the default signal node")
        return SignalNode.default()
    return nodes[-1]

# ====================================================================================================
# Sweeps
# ====================================================================================================

def cascade_output_power(blocks: Sequence[Block], input_power_dbm: float) -> float:
    """Output power of the chain for a given input power, signal path only."""
    power_dbm = input_power_dbm
    for block in blocks:
        power_dbm = block.output_power(power_dbm)
    return power_dbm

def cascade_am_am_sweep(blocks: Sequence[Block], start_dbm: float, stop_dbm: float, step_db: float) -> List[Tuple[float, float]]:
    """(input power, output power) pairs in dBm of the whole chain.

    Noise, temperature and OIP3 are not tracked: only each block's output_power is chained.

    Args:
        blocks (Sequence[Block]): Stages of the chain, in order.
        start_dbm (float): First input power in dBm.
        stop_dbm (float): Last input power in dBm (inclusive).
        step_db (float): Input power increment in dB.

    Returns:
        List[Tuple[float, float]]: AM-AM curve of the chain.
    """
    return [(pin, cascade_output_power(blocks, pin)) for pin in sweep_powers(start_dbm, stop_dbm, step_db)]

def cascade_gain_compression_sweep(blocks: Sequence[Block], start_dbm: float, stop_dbm: float, step_db: float) -> List[Tuple[float, float]]:
    """(input power in dBm, chain gain in dB) pairs, derived from the AM-AM sweep."""
    return [(pin, pout - pin) for pin, pout in cascade_am_am_sweep(blocks, start_dbm, stop_dbm, step_db)]

def cascade_input_power_sweep(input_signal: Input, blocks: Sequence[Block], start_dbm: float, stop_dbm: float,
                              step_db: float, progress: bool = False) -> List[SignalNode]:
    """Full cascade (noise, OIP3, SFDR included) evaluated for each swept input power.

    Every point is an independent cascade of a copy of the input with its power replaced.

    Args:
        input_signal (Input): Template of the signal entering the chain (its power is swept).
        blocks (Sequence[Block]): Stages of the chain, in order.
        start_dbm (float): First input power in dBm.
        stop_dbm (float): Last input power in dBm (inclusive).
        step_db (float): Input power increment in dB.
        progress (bool): Display a progress bar, defaults to False.

    Returns:
        List[SignalNode]: Output node of the chain for each swept input power.
    """
    input_powers = sweep_powers(start_dbm, stop_dbm, step_db)

    outputs = []
    for power_dbm in tqdm(input_powers, desc="Sweeping input power", disable=not progress):
        swept_input = dataclasses.replace(input_signal, power_dbm=power_dbm)
        outputs.append(cascade_vector_return_output(swept_input, blocks))
    return outputs
