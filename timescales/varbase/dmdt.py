#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# dmdt.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''Calculates Δm-Δt pair diagrams of light curves and their per-bin summaries.

A Δm-Δt diagram collects the time separation and the flux (or magnitude)
difference of every pair of observations. Binned by the time separation, it
shows on which timescales a source varies, without assuming it's periodic.

- :py:func:`.dmdt`: all `N*(N-1)/2` pairs of a light curve.

- :py:func:`.hiamp_bin_frac`: the fraction of pairs in each Δt bin with
  `|Δm|` above a threshold.

- :py:func:`.deltam_bin_quantile`: a quantile of `|Δm|` in each Δt bin.

The bins are `[e_0, e_1), [e_1, e_2), ..., [e_n-1, e_n]`: all half-open except
for the last one, which is closed on the right. Bins without pairs get nan.

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
    abs as npabs, triu_indices as nptriu_indices, diff as npdiff,
    all as npall, full as npfull, nan as npnan, quantile as npquantile
)

from scipy.stats import binned_statistic


###################
## LOCAL IMPORTS ##
###################

from ..exceptions import InvalidArgumentError
from ..lcmath import as_float_array, check_times


##################
## PAIR DIAGRAM ##
##################

def dmdt(times, fluxes):
    '''Calculates the Δm-Δt pair diagram of a time series.

    Every unordered pair of observations `i < j` gives one point::

        deltat = |times[j] - times[i]|
        deltam = fluxes[j] - fluxes[i]

    The pairs are listed row by row: `(0,1), (0,2), ..., (0,N-1), (1,2), ...`.
    This is O(N^2) in time and memory by construction.

    Parameters
    ----------

    times : array-like
        The times of the observations. These don't need to be sorted.

    fluxes : array-like
        The flux or magnitude of each observation.

    Returns
    -------

    deltat,deltam : np.arrays
        The time separation and the flux difference of each pair.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than two distinct values.

    InvalidArgumentError
        If `times` and `fluxes` have different lengths.

    '''

    times = check_times(times, 'dmdt', needsorted=False)
    fluxes = as_float_array(fluxes)

    if fluxes.size != times.size:
        raise InvalidArgumentError(
            "Arguments 'times' and 'fluxes' to dmdt() are not the same length "
            "(gave %s for times and %s for fluxes)" %
            (times.size, fluxes.size)
        )

    first, second = nptriu_indices(times.size, k=1)

    deltat = npabs(times[second] - times[first])
    deltam = fluxes[second] - fluxes[first]

    return deltat, deltam


########################
## PER-BIN STATISTICS ##
########################

def _check_binned_inputs(deltat, deltam, binedges, funcname):
    '''
    Makes sure the pair diagram and the bin edges can be binned together.

    '''

    deltat = as_float_array(deltat)
    deltam = as_float_array(deltam)
    binedges = as_float_array(binedges)

    if deltat.size != deltam.size:
        raise InvalidArgumentError(
            "Arguments 'deltat' and 'deltam' to %s() are not the same length "
            "(gave %s for deltat and %s for deltam)" %
            (funcname, deltat.size, deltam.size)
        )
    if binedges.size < 2:
        raise InvalidArgumentError(
            "Argument 'binedges' to %s() needs at least 2 edges (gave %s)" %
            (funcname, binedges.size)
        )
    if not npall(npdiff(binedges) > 0.0):
        raise InvalidArgumentError(
            "Argument 'binedges' to %s() is not strictly ascending" % funcname
        )

    return deltat, deltam, binedges


def _bin_statistic(deltat, values, binedges, statistic):
    '''
    This applies `statistic` to the values in each Δt bin. Empty bins get nan.

    '''

    if deltat.size == 0:
        return npfull(binedges.size - 1, npnan)

    binned, _, _ = binned_statistic(deltat, values,
                                    statistic=statistic,
                                    bins=binedges)

    return binned


def hiamp_bin_frac(deltat, deltam, binedges, threshold):
    '''Computes the fraction of pairs with a large flux difference in each bin
    of a Δm-Δt diagram.

    Parameters
    ----------

    deltat,deltam : array-like
        The pair diagram, e.g. from :py:func:`.dmdt`.

    binedges : array-like
        The edges of the Δt bins, strictly ascending. Pairs outside
        `[binedges[0], binedges[-1]]` are ignored.

    threshold : float
        Pairs with `|deltam| > threshold` count as high amplitude.

    Returns
    -------

    np.array
        The fraction of high amplitude pairs in each of the `len(binedges) - 1`
        bins; nan for empty bins.

    Raises
    ------

    InvalidArgumentError
        If `deltat` and `deltam` have different lengths, or the bin edges
        aren't strictly ascending.

    '''

    deltat, deltam, binedges = _check_binned_inputs(deltat, deltam, binedges,
                                                    'hiamp_bin_frac')

    hiamp = (npabs(deltam) > threshold).astype(np.float64)

    return _bin_statistic(deltat, hiamp, binedges, 'mean')


def deltam_bin_quantile(deltat, deltam, binedges, q):
    '''Computes a quantile of `|Δm|` in each bin of a Δm-Δt diagram.

    Uses linear interpolation between the sorted values in each bin.

    Parameters
    ----------

    deltat,deltam : array-like
        The pair diagram, e.g. from :py:func:`.dmdt`.

    binedges : array-like
        The edges of the Δt bins, strictly ascending. Pairs outside
        `[binedges[0], binedges[-1]]` are ignored.

    q : float
        The quantile to calculate, between 0 and 1 inclusive.

    Returns
    -------

    np.array
        The quantile of `|deltam|` in each of the `len(binedges) - 1` bins; nan
        for empty bins.

    Raises
    ------

    InvalidArgumentError
        If `q` is outside `[0, 1]`, `deltat` and `deltam` have different
        lengths, or the bin edges aren't strictly ascending.

    '''

    if not 0.0 <= q <= 1.0:
        raise InvalidArgumentError(
            "Argument 'q' to deltam_bin_quantile() must be between 0 and 1 "
            "(gave %s)" % q
        )

    deltat, deltam, binedges = _check_binned_inputs(deltat, deltam, binedges,
                                                    'deltam_bin_quantile')

    def _quantile(values):
        if len(values) == 0:
            return npnan
        return npquantile(values, q)

    return _bin_statistic(deltat, npabs(deltam), binedges, _quantile)
