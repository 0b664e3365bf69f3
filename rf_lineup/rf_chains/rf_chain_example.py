#!/usr/bin/env python3
# -*- coding: utf-8 -*-

'''
Project: RF_lineup
RF Cascade Analysis Framework

This module provides an example line-up: a 6 GHz three-stage receiver (LNA, mixer, IF amplifier).

Key Features:
- Node-by-node line-up (signal, gain, noise figure, SNR, OIP3, SFDR).
- Dynamic range summary at the receiver output.
- AM-PM input backoff of the IF amplifier.
- Optional AM-AM and gain compression plots of the whole chain.

Date: 2026-02-08
Version: 0.2
License: MIT

python -m rf_lineup.rf_chains.rf_chain_example
'''

import logging

from ..rf_components.receiver_parts import if_amplifier, lna_6ghz, mixer_6ghz
from ..rf_utils.rf_amplifier_model import AmplifierModel
from ..rf_utils.rf_cascade import cascade_am_am_sweep, cascade_gain_compression_sweep, cascade_vector_return_vector
from ..rf_utils.rf_signal_nodes import Input

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------------------------------
input_signal = Input(frequency_hz=6e9, bandwidth_hz=1e6, power_dbm=-80., noise_temperature_k=50.)

blocks       = [lna_6ghz, mixer_6ghz, if_amplifier]

if_amplifier_model = AmplifierModel.with_am_pm(if_amplifier, coeff_deg_per_db=10.)
# -----------------------------------------------------------------------------------------------------


def _format_optional(value, unit):
    return f"{value:.2f} {unit}" if value is not None else "N/A"

# ====================================================================================================
# Main Execution
# ====================================================================================================
def main(toplot: bool = False) -> None:
    '''Log the line-up of the example receiver, and plot its compression curves when toplot is set.'''
    logging.basicConfig(level=logging.INFO, format='%(asctime)s-%(levelname)s-%(module)s-%(funcName)s: %(message)s')

    logger.info(  "====================================================" )
    logger.info( f"=========== Line-up of {input_signal}" )
    logger.info(  "====================================================" )

    # ---------------------------------------------------------------
    nodes = cascade_vector_return_vector(input_signal, blocks)

    input_power_dbm = input_signal.power_dbm
    for block, node in zip(blocks, nodes):
        logger.info( f"{node.name}: Pin: {input_power_dbm:.2f} dBm, Gain: {block.gain_db:.2f} dB, NF: {block.noise_figure_db:.2f} dB, "
                     f"Cum. gain: {node.cumulative_gain_db:.2f} dB, Cum. NF: {node.cumulative_noise_figure_db:.2f} dB, "
                     f"Pout: {node.signal_power_dbm:.2f} dBm, SNR: {node.signal_to_noise_ratio_db():.2f} dB, "
                     f"OIP3: {_format_optional(node.cumulative_oip3_dbm, 'dBm')}, SFDR: {_format_optional(node.sfdr_db, 'dB')}" )
        input_power_dbm = node.signal_power_dbm
    # ---------------------------------------------------------------

    # ---------------------------------------------------------------
    summary = nodes[-1].dynamic_range_summary()
    if summary is not None:
        logger.info( f"Dynamic range: {summary.linear_dr_db:.2f} dB, SFDR: {_format_optional(summary.sfdr_db, 'dB')}, "
                     f"MDS: {summary.mds_dbm:.2f} dBm, Max input: {summary.max_input_dbm:.2f} dBm" )

    max_phase_deg = 5.
    backoff_db    = if_amplifier_model.backoff_for_target_phase(max_phase_deg)
    logger.info( f"{if_amplifier.name} backoff for {max_phase_deg}° AM-PM: {_format_optional(backoff_db, 'dB')}" )
    # ---------------------------------------------------------------

    if toplot:
        import matplotlib.pyplot as plt

        am_am = cascade_am_am_sweep(blocks, start_dbm=-80., stop_dbm=-20., step_db=0.5)
        gains = cascade_gain_compression_sweep(blocks, start_dbm=-80., stop_dbm=-20., step_db=0.5)

        fig, (ax_am_am, ax_gain) = plt.subplots(2, 1, sharex=True)
        ax_am_am.plot([pin for pin, _ in am_am], [pout for _, pout in am_am])
        ax_am_am.set_ylabel("Output power (dBm)")
        ax_am_am.set_title("AM-AM")
        ax_am_am.grid(True)

        ax_gain.plot([pin for pin, _ in gains], [gain for _, gain in gains])
        ax_gain.set_xlabel("Input power (dBm)")
        ax_gain.set_ylabel("Gain (dB)")
        ax_gain.set_title("Gain compression")
        ax_gain.grid(True)

        plt.show()  # Display all plots

if __name__ == '__main__':
    main(toplot=True)
# ====================================================================================================
