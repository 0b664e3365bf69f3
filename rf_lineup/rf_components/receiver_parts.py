#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Project: RF_lineup
Catalog of receiver parts, ready to be cascaded.

Values are typical datasheet figures at the band of use of each part.
"""

# ====================================================================================================
# Date: 2026-02-08
#
# python -m rf_lineup.rf_components.receiver_parts
# ====================================================================================================

import logging

from ..rf_utils.rf_blocks import Block
from ..rf_utils.rf_essential_components import attenuator, mixer, rf_cable, simple_amplifier

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------------------------------
# C-band receiver (6 GHz)
lna_6ghz          = simple_amplifier(gain_db=20., nf_db=1.5, op1db_dbm=5.,  oip3_dbm=20., name="LNA")

mixer_6ghz        = mixer(conversion_loss_db=8., op1db_dbm=10., oip3_dbm=15., name="Mixer")

if_amplifier      = simple_amplifier(gain_db=25., nf_db=4.,  op1db_dbm=15., oip3_dbm=25., name="IF Amplifier")
# -----------------------------------------------------------------------------------------------------

# -----------------------------------------------------------------------------------------------------
# Ku-band satellite reception (10.7 - 12.75 GHz)
ku_lnb            = Block(name="Ku LNB", gain_db=55., noise_figure_db=0.8, output_p1db_dbm=5., output_ip3_dbm=15.)

cable_run_10m     = rf_cable(length_m=10., freq_hz=1.5e9, insertion_losses_db=0.5, name="Cable Run")  # L-band IF after the LNB

pad_3db           = attenuator(att_db=3., name="3 dB Pad")
# -----------------------------------------------------------------------------------------------------

RECEIVER_PARTS = [lna_6ghz, mixer_6ghz, if_amplifier, ku_lnb, cable_run_10m, pad_3db]


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s-%(levelname)s-%(module)s-%(funcName)s: %(message)s')
    for part in RECEIVER_PARTS:
        logger.info(f"{part.name}: gain={part.gain_db:.2f} dB, NF={part.noise_figure_db:.2f} dB, "
                    f"OP1dB={part.output_p1db_dbm} dBm, OIP3={part.output_ip3_dbm} dBm")
