#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# autocorr.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Calculates the autocorrelation function (ACF) of irregularly sampled time
series, and the ACF of the sampling pattern alone (the window function).

Two estimators are provided:

- the default pair-binned estimator, which collects every pair of
  observations whose time separation falls into a tolerance bin around each
  lag.

- the spectral estimator (`maxfreq` argument), which transforms the power
  spectrum of the series up to `maxfreq` back onto an evenly spaced lag grid.
  This leaves out the variability faster than `maxfreq`.

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
    sum as npsum, mean as npmean, std as npstd, sqrt as npsqrt,
    zeros as npzeros, ones as npones, full as npfull, nan as npnan,
    diff as npdiff, min as npmin, concatenate as npconcatenate,
    searchsorted as npsearchsorted, bincount as npbincount,
    divide as npdivide, arange as nparange, ceil as npceil
)


###################
## LOCAL IMPORTS ##
###################

from ..exceptions import DegenerateInputError, NegativeFrequencyError
from ..lcmath import (
    check_magseries, check_times, check_offsets, check_finite_fluxes
)
from ..periodbase.dft import trig_blocks


############
## CONFIG ##
############

# the spectral estimator samples the power spectrum with a frequency step of
# at most 1/(SPECTRAL_OVERSAMPLING*delta_t)
SPECTRAL_OVERSAMPLING = 4


#################################
## PAIR-BINNED AUTOCORRELATION ##
#################################

def _lag_bin_edges(times, offsets):
    '''This returns the K+1 edges of the tolerance bins around K lags.

    Neighbouring bins meet halfway between their lags. The outer edges are
    half a lag step beyond the first and last lags. With only one lag, its bin
    is half of the smallest sampling gap wide on either side.

    '''

    if offsets.size > 1:
        midpoints = 0.5*(offsets[1:] + offsets[:-1])
        firstedge = offsets[0] - 0.5*(offsets[1] - offsets[0])
        lastedge = offsets[-1] + 0.5*(offsets[-1] - offsets[-2])
        return npconcatenate(([firstedge], midpoints, [lastedge]))

    gaps = npdiff(times)
    halfwidth = 0.5*npmin(gaps[gaps > 0.0])

    return np.array([offsets[0] - halfwidth, offsets[0] + halfwidth])


def _pair_sums(times, fluxes, binedges):
    '''This accumulates the pair sums for every lag bin.

    Goes over the observations one at a time, pairing each observation `i`
    with all observations `j >= i` whose separation `times[j] - times[i]` falls
    into `[binedges[0], binedges[-1])`. Only the K sums are kept, so the memory
    use is O(N + K) for O(N^2) work.

    Returns
    -------

    tuple
        `(npairs, crosssum, firstsqsum, secondsqsum)`, arrays of length K with
        the number of pairs, `sum(f_i*f_j)`, `sum(f_i**2)` and `sum(f_j**2)`
        in each bin.

    '''

    nbins = binedges.size - 1

    npairs = npzeros(nbins, dtype=np.float64)
    crosssum = npzeros(nbins, dtype=np.float64)
    firstsqsum = npzeros(nbins, dtype=np.float64)
    secondsqsum = npzeros(nbins, dtype=np.float64)

    # the times are sorted, so the pairs of each observation with lags inside
    # the outer edges form a contiguous run
    minlag, maxlag = binedges[0], binedges[-1]

    for i in range(times.size):

        jstart = max(i, npsearchsorted(times, times[i] + minlag, side='left'))
        jend = npsearchsorted(times, times[i] + maxlag, side='left')

        if jend <= jstart:
            continue

        lags = times[jstart:jend] - times[i]
        binind = npsearchsorted(binedges, lags, side='right') - 1
        inbin = (binind >= 0) & (binind < nbins)

        if not inbin.any():
            continue

        binind = binind[inbin]
        seconds = fluxes[jstart:jend][inbin]

        paircounts = npbincount(binind, minlength=nbins)

        npairs += paircounts
        crosssum += fluxes[i]*npbincount(binind, weights=seconds,
                                         minlength=nbins)
        firstsqsum += fluxes[i]*fluxes[i]*paircounts
        secondsqsum += npbincount(binind, weights=seconds*seconds,
                                  minlength=nbins)

    return npairs, crosssum, firstsqsum, secondsqsum


def _binned_acf(times, fluxes, offsets):
    '''
    This is the pair-binned ACF estimate. Empty bins get nan.

    '''

    binedges = _lag_bin_edges(times, offsets)
    npairs, crosssum, firstsqsum, secondsqsum = _pair_sums(times,
                                                           fluxes,
                                                           binedges)
    norm = npsqrt(firstsqsum*secondsqsum)

    return npdivide(crosssum, norm,
                    out=npfull(offsets.size, npnan),
                    where=(npairs > 0) & (norm > 0.0))


##############################
## SPECTRAL AUTOCORRELATION ##
##############################

def _check_maxfreq(offsets, maxfreq, funcname):
    '''This validates `maxfreq` and caps it at the Nyquist frequency of the lag
    grid.

    '''

    if not maxfreq > 0.0:
        raise NegativeFrequencyError(
            "Argument 'maxfreq' to %s() must be positive (gave %s)" %
            (funcname, maxfreq)
        )

    if offsets.size > 1:

        lagnyquist = 0.5/(offsets[1] - offsets[0])

        if maxfreq > lagnyquist:
            LOGWARNING('maxfreq = %.6g is above the Nyquist frequency of the '
                       'lag grid, capping it at %.6g' %
                       (maxfreq, lagnyquist))
            maxfreq = lagnyquist

    return maxfreq


def _spectral_acf(times, fluxes, offsets, maxfreq):
    '''This transforms the power spectrum of `fluxes` on `(0, maxfreq]` back
    onto the lags::

        acf(tau) = sum(P(f)*cos(2*pi*f*tau)) / sum(P(f))

    The frequency grid is evenly spaced, ends at `maxfreq`, and has a step no
    larger than `1/(SPECTRAL_OVERSAMPLING*delta_t)`.

    '''

    baseline = times[-1] - times[0]
    maxstep = 1.0/(SPECTRAL_OVERSAMPLING*baseline)

    nfreqs = max(1, int(npceil(maxfreq/maxstep)))
    freqs = maxfreq*nparange(1, nfreqs + 1)/nfreqs

    # the power spectrum doesn't depend on the time origin
    reftimes = times - times[0]

    power = npzeros(freqs.size, dtype=np.float64)
    for blockslice, cosphase, sinphase in trig_blocks(reftimes, freqs):
        realpart = cosphase.dot(fluxes)
        imagpart = sinphase.dot(fluxes)
        power[blockslice] = realpart*realpart + imagpart*imagpart

    totalpower = npsum(power)

    if not totalpower > 0.0:
        LOGERROR('no power below maxfreq = %.6g, '
                 'the spectral ACF is undefined' % maxfreq)
        return npfull(offsets.size, npnan)

    acf = npzeros(offsets.size, dtype=np.float64)
    for blockslice, coslag, _ in trig_blocks(offsets, freqs):
        acf += power[blockslice].dot(coslag)

    return acf/totalpower


#############################
## ACF AND WINDOW FUNCTION ##
#############################

def auto_corr(times, fluxes, offsets, maxfreq=None):
    '''Calculates the autocorrelation function of a time series over a grid
    of time lags.

    The fluxes are standardized to zero mean and unit variance first.

    With `maxfreq=None`, each lag gets a tolerance bin that extends halfway to
    its neighbouring lags. Every pair of observations `i <= j` (including each
    observation with itself, at lag 0) with `times[j] - times[i]` in the bin
    contributes, and the ACF is::

        acf = sum(z_i*z_j) / sqrt( sum(z_i**2) * sum(z_j**2) )

    which is between -1 and 1. Lags with no pairs in their bin get nan.

    With `maxfreq` set, the power spectrum of the series on `(0, maxfreq]` is
    transformed back onto the lags instead. This needs an evenly spaced lag
    grid, and `maxfreq` is capped at its Nyquist frequency `0.5/lagstep`.

    Parameters
    ----------

    times : array-like
        The times of the observations. Must be sorted in ascending order and
        contain at least two unique values.

    fluxes : array-like
        The flux (or magnitude) measurements, one per time.

    offsets : array-like
        The time lags to calculate the ACF at: non-negative and strictly
        ascending. :py:func:`timescales.gridgen.offset_gen` makes a suitable
        grid.

    maxfreq : float or None
        If set, uses the spectral estimator with this frequency cutoff.

    Returns
    -------

    np.array
        The ACF at each lag in `offsets`, in the same order.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than two unique values or `fluxes` is constant.

    NotSortedError
        If `times` is not in ascending order.

    InvalidArgumentError
        If `times` and `fluxes` have different lengths, or `offsets` is empty,
        negative or not strictly ascending, or `fluxes` has nans
        or infs.

    NotUniformError
        If `maxfreq` is set and `offsets` isn't evenly spaced.

    NegativeFrequencyError
        If `maxfreq` is zero or negative.

    '''

    times, fluxes = check_magseries(times, fluxes, 'auto_corr')
    offsets = check_offsets(offsets, 'auto_corr',
                            needuniform=maxfreq is not None)
    check_finite_fluxes(fluxes, 'auto_corr')

    fluxstd = npstd(fluxes)
    if not fluxstd > 0.0:
        raise DegenerateInputError(
            "Argument 'fluxes' to auto_corr() is constant, "
            "the ACF is undefined"
        )

    standardized = (fluxes - npmean(fluxes))/fluxstd

    if maxfreq is None:
        return _binned_acf(times, standardized, offsets)

    maxfreq = _check_maxfreq(offsets, maxfreq, 'auto_corr')
    return _spectral_acf(times, standardized, offsets, maxfreq)


def ac_window(times, offsets, maxfreq=None):
    '''Calculates the autocorrelation window function of a time sampling.

    This runs the :py:func:`.auto_corr` procedure on a series of ones, without
    standardizing it, so it only measures the sampling pattern. The ACF of a
    real signal is implicitly convolved with this.

    With `maxfreq=None`, the window is the number of pairs in each lag bin
    divided by the number of observations. For `N` evenly spaced observations
    and a lag grid with the same step, this is `(N - k)/N` at the `k`-th lag,
    and 1 at lag 0.

    With `maxfreq` set, the window is the transformed spectral window of the
    sampling, normalized to 1 at lag 0.

    Parameters
    ----------

    times : array-like
        The times of the observations. Must be sorted in ascending order and
        contain at least two unique values.

    offsets : array-like
        The time lags to calculate the window function at: non-negative and
        strictly ascending.

    maxfreq : float or None
        If set, uses the spectral estimator with this frequency cutoff.

    Returns
    -------

    np.array
        The window function at each lag in `offsets`, in the same order.

    Raises
    ------

    Same as :py:func:`.auto_corr`, apart from the constant flux check.

    '''

    times = check_times(times, 'ac_window')
    offsets = check_offsets(offsets, 'ac_window',
                            needuniform=maxfreq is not None)

    ones = npones(times.size, dtype=np.float64)

    if maxfreq is None:
        binedges = _lag_bin_edges(times, offsets)
        npairs = _pair_sums(times, ones, binedges)[0]
        return npairs/times.size

    maxfreq = _check_maxfreq(offsets, maxfreq, 'ac_window')
    return _spectral_acf(times, ones, offsets, maxfreq)
