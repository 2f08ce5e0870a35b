#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# peaks.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Finds the significant local maxima of a sampled series, e.g. a periodogram or
an autocorrelation function.

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
    isfinite as npisfinite, diff as npdiff, flatnonzero as npflatnonzero,
    concatenate as npconcatenate, maximum as npmaximum, argsort as npargsort,
    minimum as npminimum, all as npall
)


##################
## PEAK FINDING ##
##################

def peak_find(xs, ys, minprominence):
    '''This finds the local maxima of a series that stand out by more than
    `minprominence`.

    A local maximum is a point strictly greater than both of its
    neighbours. A run of equal values (a plateau) counts as a single point, and
    a peak on a plateau is reported at the first point of the run.

    The prominence of a peak is its height above the higher of its two
    bounding minima. The bounding minimum on each side is the lowest value
    between the peak and the next local maximum on that side (or the end of
    the series if there isn't one).

    This never raises. Non-finite points are dropped before searching, and if
    `xs` and `ys` have different lengths, the longer one is truncated.

    Parameters
    ----------

    xs : array-like
        The locations of the samples, e.g. frequencies or time lags. If these
        are not in ascending order, the series is sorted by them first.

    ys : array-like
        The values of the samples.

    minprominence : float
        Only peaks with a prominence strictly greater than this are returned.

    Returns
    -------

    peakxs,peakys : np.arrays
        The locations and values of the peaks, in ascending order of location.
        Both are empty if the series has no qualifying peaks (e.g. it's empty,
        or monotonic).

    '''

    xs = np.asarray(xs, dtype=np.float64).ravel()
    ys = np.asarray(ys, dtype=np.float64).ravel()

    if xs.size != ys.size:
        LOGWARNING('xs and ys have different lengths (%s and %s), '
                   'ignoring the extra points' % (xs.size, ys.size))
        npts = min(xs.size, ys.size)
        xs, ys = xs[:npts], ys[:npts]

    finiteind = npisfinite(xs) & npisfinite(ys)
    xs, ys = xs[finiteind], ys[finiteind]

    if xs.size > 1 and not npall(npdiff(xs) >= 0.0):
        sortind = npargsort(xs, kind='stable')
        xs, ys = xs[sortind], ys[sortind]

    emptyresult = (np.array([], dtype=np.float64),
                   np.array([], dtype=np.float64))

    if ys.size < 3:
        return emptyresult

    # collapse plateaus to their first point
    runstarts = npconcatenate(([0], npflatnonzero(npdiff(ys) != 0.0) + 1))
    runys = ys[runstarts]

    if runys.size < 3:
        return emptyresult

    # consecutive runs always differ, so the slopes are never zero
    slopes = npdiff(runys)
    maxruns = npflatnonzero((slopes[:-1] > 0.0) & (slopes[1:] < 0.0)) + 1

    if maxruns.size == 0:
        return emptyresult

    # the segments [0, m1), [m1, m2), ..., [mk, end) each hold one valley, so
    # their minima are the bounding minima of the peaks
    valleys = npminimum.reduceat(runys, npconcatenate(([0], maxruns)))
    prominences = runys[maxruns] - npmaximum(valleys[:-1], valleys[1:])

    peakind = runstarts[maxruns[prominences > minprominence]]

    return xs[peakind], ys[peakind]
