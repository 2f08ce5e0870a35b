#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# lsp.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Contains the classical Lomb-Scargle periodogram (Lomb 1976, Scargle 1982) for
unevenly sampled time series, normalized by the data variance as in Horne &
Baliunas (1986) so that a pure white noise periodogram has exponentially
distributed power values with mean 1.

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
    nan as npnan, sum as npsum, cos as npcos, sin as npsin,
    arctan2 as nparctan2, zeros as npzeros, argmax as npargmax,
    argsort as npargsort, var as npvar, mean as npmean, divide as npdivide,
    zeros_like as npzeros_like
)


###################
## LOCAL IMPORTS ##
###################

from ..exceptions import DegenerateInputError
from ..lcmath import check_magseries, check_freqs, check_finite_fluxes
from ..gridgen import freq_gen
from ..varbase.peaks import peak_find
from .dft import trig_blocks


############
## CONFIG ##
############

# sums of squared trig terms smaller than this (per observation) are treated
# as zero; this happens at frequencies where every phase lands on a node
MINTRIGSUM = 1.0e-10


########################
## LOMB-SCARGLE POWER ##
########################

def _lsp_block_power(cosphase, sinphase, centered):
    '''This calculates the un-normalized LSP for one block of frequencies.

    The relations used are::

        tan(2*omega*tau) = sum(sin(2*omega*t)) / sum(cos(2*omega*t))

        P(omega) = 0.5 * ( YC_tau**2/CC_tau + YS_tau**2/SS_tau )

        where: YC_tau = sum( y_i*cos(omega*(t_i - tau)) )
               YS_tau = sum( y_i*sin(omega*(t_i - tau)) )
               CC_tau = sum( cos(omega*(t_i - tau))**2 )
               SS_tau = sum( sin(omega*(t_i - tau))**2 )

    All tau-shifted sums are obtained from the unshifted ones with the angle
    addition identities, so the trig matrices are only evaluated once.

    '''

    nobs = centered.size

    YC = cosphase.dot(centered)
    YS = sinphase.dot(centered)

    CC = npsum(cosphase*cosphase, axis=1)
    SS = nobs - CC
    CS = npsum(cosphase*sinphase, axis=1)

    # sum(sin(2wt)) = 2*CS and sum(cos(2wt)) = CC - SS
    omegatau = 0.5*nparctan2(2.0*CS, CC - SS)
    cos_wtau = npcos(omegatau)
    sin_wtau = npsin(omegatau)

    YC_tau = cos_wtau*YC + sin_wtau*YS
    YS_tau = cos_wtau*YS - sin_wtau*YC

    CC_tau = (cos_wtau*cos_wtau*CC + 2.0*cos_wtau*sin_wtau*CS +
              sin_wtau*sin_wtau*SS)
    SS_tau = (cos_wtau*cos_wtau*SS - 2.0*cos_wtau*sin_wtau*CS +
              sin_wtau*sin_wtau*CC)

    mintrigsum = MINTRIGSUM*nobs

    costerm = npdivide(YC_tau*YC_tau, CC_tau,
                       out=npzeros_like(CC_tau), where=CC_tau > mintrigsum)
    sinterm = npdivide(YS_tau*YS_tau, SS_tau,
                       out=npzeros_like(SS_tau), where=SS_tau > mintrigsum)

    return 0.5*(costerm + sinterm)


def check_lsp_inputs(times, fluxes, freqs, funcname='lomb_scargle'):
    '''
    Runs the input checks for the periodogram and returns the float arrays.

    '''

    times, fluxes = check_magseries(times, fluxes, funcname)
    check_finite_fluxes(fluxes, funcname)
    freqs = check_freqs(freqs, funcname)

    return times, fluxes, freqs


def _lomb_scargle(times, fluxes, freqs):
    '''
    This runs the periodogram loop over frequency blocks. Requires already
    checked inputs.

    '''

    fluxvar = npvar(fluxes, ddof=1)

    if not fluxvar > 0.0:
        raise DegenerateInputError(
            "Argument 'fluxes' to lomb_scargle() has zero variance"
        )

    centered = fluxes - npmean(fluxes)

    # the power doesn't depend on the time origin
    reftimes = times - times[0]

    power = npzeros(freqs.size, dtype=np.float64)

    for blockslice, cosphase, sinphase in trig_blocks(reftimes, freqs):
        power[blockslice] = _lsp_block_power(cosphase, sinphase, centered)

    return power/fluxvar


def lomb_scargle(times, fluxes, freqs):
    '''Calculates the Lomb-Scargle periodogram of a time series.

    Uses a per-frequency time offset tau that makes the sine and cosine terms
    orthogonal for this set of observation times, which corrects for the
    uneven sampling. The fluxes are mean-subtracted and the power is divided
    by twice the sample variance, so for Gaussian white noise each power value
    is approximately exponentially distributed with mean 1.

    Parameters
    ----------

    times : array-like
        The times at which the fluxes were measured. Must be sorted in
        ascending order and contain at least two unique values.

    fluxes : array-like
        The flux (or magnitude) measurements, one per time.

    freqs : array-like
        The frequency grid to evaluate the periodogram over. All frequencies
        must be positive.

    Returns
    -------

    np.array
        The non-negative periodogram power at each frequency in `freqs`, in the
        same order.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than two unique values or `fluxes` is constant.

    NotSortedError
        If `times` is not in ascending order.

    InvalidArgumentError
        If `times` and `fluxes` have different lengths, or `fluxes` has nans
        or infs.

    NegativeFrequencyError
        If any frequency is zero or negative.

    '''

    times, fluxes, freqs = check_lsp_inputs(times, fluxes, freqs)
    return _lomb_scargle(times, fluxes, freqs)


###########################
## PERIOD SEARCH WRAPPER ##
###########################

def lsp_periodfind(times,
                   fluxes,
                   freqs=None,
                   nbestpeaks=5,
                   minprominence=0.0,
                   verbose=True):
    '''This runs a Lomb-Scargle period search and collects the best periods.

    The periodogram peaks are found with
    :py:func:`timescales.varbase.peaks.peak_find`, so the `nbestpeaks` best
    periods always belong to separate periodogram peaks.

    Parameters
    ----------

    times,fluxes : array-like
        The time series to search. Same requirements as
        :py:func:`.lomb_scargle`.

    freqs : array-like or None
        The frequency grid to use. If None, the default grid from
        :py:func:`timescales.gridgen.freq_gen` is used.

    nbestpeaks : int
        The number of best periods to return, in order of decreasing power.

    minprominence : float
        Periodogram peaks with a prominence at or below this value are ignored
        when collecting the best periods.

    verbose : bool
        If True, will report on the frequency grid and the best period.

    Returns
    -------

    dict
        A dict of the following form::

            {'bestperiod': the period with the highest periodogram power,
             'bestlspval': the power at the best period,
             'nbestpeaks': the input value of nbestpeaks,
             'nbestlspvals': list of the powers of the best peaks,
             'nbestperiods': list of the periods of the best peaks,
             'lspvals': the full array of periodogram powers,
             'freqs': the frequency grid,
             'periods': the periods corresponding to the frequency grid,
             'method': 'ls',
             'kwargs': dict of the input kwargs for record-keeping}

    '''

    if freqs is None:
        freqs = freq_gen(times, verbose=verbose)

    times, fluxes, freqs = check_lsp_inputs(times, fluxes, freqs,
                                            funcname='lsp_periodfind')

    if verbose:
        LOGINFO('running Lomb-Scargle with %s observations '
                'and %s frequencies...' % (times.size, freqs.size))

    lspvals = _lomb_scargle(times, fluxes, freqs)
    periods = 1.0/freqs

    resultkwargs = {'nbestpeaks':nbestpeaks,
                    'minprominence':minprominence}

    if freqs.size == 0:
        LOGERROR('empty frequency grid, no periods to report')
        return {'bestperiod':npnan,
                'bestlspval':npnan,
                'nbestpeaks':nbestpeaks,
                'nbestlspvals':[],
                'nbestperiods':[],
                'lspvals':lspvals,
                'freqs':freqs,
                'periods':periods,
                'method':'ls',
                'kwargs':resultkwargs}

    bestind = npargmax(lspvals)

    peakfreqs, peakvals = peak_find(freqs, lspvals, minprominence)

    # no interior peaks: the global maximum sits on an edge of the grid
    if peakfreqs.size == 0:
        peakfreqs, peakvals = freqs[[bestind]], lspvals[[bestind]]

    sortind = npargsort(peakvals)[::-1][:nbestpeaks]
    nbestperiods = [1.0/x for x in peakfreqs[sortind]]
    nbestlspvals = list(peakvals[sortind])

    if verbose:
        LOGINFO('best period = %.6f, power = %.3f' %
                (periods[bestind], lspvals[bestind]))

    return {'bestperiod':periods[bestind],
            'bestlspval':lspvals[bestind],
            'nbestpeaks':nbestpeaks,
            'nbestlspvals':nbestlspvals,
            'nbestperiods':nbestperiods,
            'lspvals':lspvals,
            'freqs':freqs,
            'periods':periods,
            'method':'ls',
            'kwargs':resultkwargs}
