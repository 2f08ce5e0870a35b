#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# dft.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Contains the discrete Fourier transform for irregularly sampled time series,
and the block-wise trigonometric accumulation shared with the Lomb-Scargle
periodogram in :py:mod:`timescales.periodbase.lsp`.

This is a brute-force O(N*F) evaluation. No assumption of even sampling is
made, so the usual FFT factorizations don't apply.

'''

#############
## LOGGING ##
#############

import logging
from timescales import log_sub, log_fmt, log_date_fmt

DEBUG = False
if DEBUG:
    level = logging.DEBUG
else:
    level = logging.INFO
LOGGER = logging.getLogger(__name__)
logging.basicConfig(
    level=level,
    style=log_sub,
    format=log_fmt,
    datefmt=log_date_fmt,
)

LOGDEBUG = LOGGER.debug
LOGINFO = LOGGER.info
LOGWARNING = LOGGER.warning
LOGERROR = LOGGER.error
LOGEXCEPTION = LOGGER.exception


#############
## IMPORTS ##
#############

import numpy as np
from numpy import (
    cos as npcos, sin as npsin, outer as npouter, exp as npexp,
    zeros as npzeros, pi as pi_value
)


###################
## LOCAL IMPORTS ##
###################

from ..lcmath import check_magseries, check_freqs


############
## CONFIG ##
############

# the largest number of (frequency, time) elements evaluated at once; this
# bounds the memory used by the trig matrices to ~2 x 8 x MAXBLOCKELEMS bytes
MAXBLOCKELEMS = 2000000


###################################
## SPECTRAL ACCUMULATION HELPERS ##
###################################

def trig_blocks(times, freqs, maxblockelems=MAXBLOCKELEMS):
    '''This yields the cos and sin of the phase 2*pi*f*t, one block of
    frequencies at a time.

    Both the DFT and the Lomb-Scargle periodogram are sums over these matrices
    (multiplied by the fluxes), so they share this generator.

    Parameters
    ----------

    times : np.array
        The observation times. For numerical precision, these should already be
        referenced to a nearby epoch (e.g. `times - times[0]`).

    freqs : np.array
        The frequency grid.

    maxblockelems : int
        The maximum number of elements in each yielded matrix.

    Yields
    ------

    tuple
        `(blockslice, cosphase, sinphase)`, where `blockslice` is the slice of
        `freqs` covered by this block, and `cosphase`, `sinphase` are arrays of
        shape `(blocksize, times.size)`.

    '''

    blocksize = max(1, int(maxblockelems // max(1, times.size)))

    for start in range(0, freqs.size, blocksize):

        blockslice = slice(start, min(start + blocksize, freqs.size))
        phase = 2.0*pi_value*npouter(freqs[blockslice], times)

        yield blockslice, npcos(phase), npsin(phase)


#########
## DFT ##
#########

def dft(times, fluxes, freqs):
    '''Calculates the discrete Fourier transform of an irregularly sampled
    time series::

        F(f) = sum_j fluxes[j] * exp(-2*pi*i*f*times[j])

    Parameters
    ----------

    times : array-like
        The times at which the fluxes were measured. Must be sorted in
        ascending order and contain at least two unique values.

    fluxes : array-like
        The flux (or magnitude) measurements, one per time.

    freqs : array-like
        The frequency grid to evaluate the transform over. All frequencies must
        be positive. :py:func:`timescales.gridgen.freq_gen` makes a suitable
        grid.

    Returns
    -------

    np.array
        A complex array with the transform at each frequency in `freqs`, in the
        same order.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than two unique values.

    NotSortedError
        If `times` is not in ascending order.

    InvalidArgumentError
        If `times` and `fluxes` have different lengths.

    NegativeFrequencyError
        If any frequency is zero or negative.

    '''

    times, fluxes = check_magseries(times, fluxes, 'dft')
    freqs = check_freqs(freqs, 'dft')

    # reference the phases to the first observation so large epochs (e.g. JD)
    # don't eat up the precision of the trig functions
    epoch = times[0]
    reftimes = times - epoch

    transform = npzeros(freqs.size, dtype=np.complex128)

    for blockslice, cosphase, sinphase in trig_blocks(reftimes, freqs):
        transform[blockslice] = cosphase.dot(fluxes) - 1j*sinphase.dot(fluxes)

    # undo the epoch shift
    transform = transform * npexp(-2.0j*pi_value*freqs*epoch)

    return transform
