#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# lcmath.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Contains the input checks shared by all timescales functions: making sure time
series have enough distinct samples, are sorted, have matching lengths, and
that frequency and offset grids are usable.

Every check raises one of the exceptions in :py:mod:`timescales.exceptions`
and never modifies its inputs.

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
    asarray as npasarray, diff as npdiff, all as npall, any as npany,
    abs as npabs, mean as npmean, isfinite as npisfinite
)

from .exceptions import (
    DegenerateInputError, NotSortedError, NotUniformError,
    InvalidArgumentError, NegativeFrequencyError
)


############
## CONFIG ##
############

# relative tolerance on the grid step used when checking grid uniformity
UNIFORM_RTOL = 1.0e-6


#######################
## BASIC ARRAY TESTS ##
#######################

def as_float_array(values):
    '''
    Returns `values` as a 1-D float64 array. Scalars become length-1 arrays.

    '''

    return np.atleast_1d(npasarray(values, dtype=np.float64)).ravel()


def is_sorted(values):
    '''
    Returns True if `values` is in ascending (non-decreasing) order.

    '''

    return values.size < 2 or bool(npall(npdiff(values) >= 0.0))


def has_distinct_values(values):
    '''
    Returns True if `values` contains at least two unique values.

    '''

    return values.size > 1 and bool(npany(values != values[0]))


def is_uniform_grid(grid, rtol=UNIFORM_RTOL):
    '''This checks if the grid is evenly spaced.

    Parameters
    ----------

    grid : np.array
        The grid to check. Grids with fewer than 3 elements are always uniform.

    rtol : float
        The largest allowed deviation of any grid step from the mean step,
        relative to the mean step.

    Returns
    -------

    bool
        True if the grid is uniform.

    '''

    if grid.size < 3:
        return True

    steps = npdiff(grid)
    meanstep = npmean(steps)

    if meanstep == 0.0:
        return False

    return bool(npall(npabs(steps - meanstep) <= rtol*npabs(meanstep)))


####################
## INPUT CHECKING ##
####################

def check_times(times, funcname, needsorted=True):
    '''This checks the times array of a time series.

    Parameters
    ----------

    times : array-like
        The times to check.

    funcname : str
        The name of the calling function, used in the exception messages.

    needsorted : bool
        If True, the times must be in ascending order.

    Returns
    -------

    np.array
        The times as a float array.

    Raises
    ------

    DegenerateInputError
        If `times` contains fewer than two distinct values.

    NotSortedError
        If `needsorted` is True and `times` is not in ascending order.

    '''

    times = as_float_array(times)

    if not has_distinct_values(times):
        raise DegenerateInputError(
            "Argument 'times' to %s() contains fewer than two unique "
            "values (got %s observations)" % (funcname, times.size)
        )

    if needsorted and not is_sorted(times):
        raise NotSortedError(
            "Argument 'times' to %s() is not sorted in ascending order" %
            funcname
        )

    return times


def check_magseries(times, fluxes, funcname, needsorted=True):
    '''This checks a full time series.

    Runs :py:func:`.check_times` first, then makes sure `fluxes` has one value
    per time.

    Parameters
    ----------

    times,fluxes : array-like
        The time series to check.

    funcname : str
        The name of the calling function, used in the exception messages.

    needsorted : bool
        If True, the times must be in ascending order.

    Returns
    -------

    times,fluxes : np.arrays
        The time series as float arrays.

    '''

    times = check_times(times, funcname, needsorted=needsorted)
    fluxes = as_float_array(fluxes)

    if fluxes.size != times.size:
        raise InvalidArgumentError(
            "Arguments 'times' and 'fluxes' to %s() are not the same length "
            "(gave %s for times and %s for fluxes)" %
            (funcname, times.size, fluxes.size)
        )

    return times, fluxes


def check_finite_fluxes(fluxes, funcname):
    '''
    This makes sure there are no nans or infs in the fluxes.

    '''

    if not npall(npisfinite(fluxes)):
        raise InvalidArgumentError(
            "Argument 'fluxes' to %s() contains non-finite values" % funcname
        )

    return fluxes


def check_freqs(freqs, funcname):
    '''
    This makes sure all frequencies in the grid are strictly positive and
    returns the grid as a float array.

    '''

    freqs = as_float_array(freqs)

    if freqs.size > 0 and not npall(freqs > 0.0):
        raise NegativeFrequencyError(
            "Argument 'freqs' to %s() contains zero or negative "
            "frequencies" % funcname
        )

    return freqs


def check_offsets(offsets, funcname, needuniform=False):
    '''This checks an offset (time lag) grid.

    Parameters
    ----------

    offsets : array-like
        The time lags to check.

    funcname : str
        The name of the calling function, used in the exception messages.

    needuniform : bool
        If True, the offsets must also be evenly spaced.

    Returns
    -------

    np.array
        The offsets as a float array.

    Raises
    ------

    InvalidArgumentError
        If the grid is empty, contains negative lags, or is not strictly
        ascending.

    NotUniformError
        If `needuniform` is True and the grid is not evenly spaced.

    '''

    offsets = as_float_array(offsets)

    if offsets.size == 0:
        raise InvalidArgumentError(
            "Argument 'offsets' to %s() is empty" % funcname
        )
    if npany(offsets < 0.0):
        raise InvalidArgumentError(
            "Argument 'offsets' to %s() contains negative time lags" %
            funcname
        )
    if offsets.size > 1 and not npall(npdiff(offsets) > 0.0):
        raise InvalidArgumentError(
            "Argument 'offsets' to %s() is not strictly ascending" % funcname
        )
    if needuniform and not is_uniform_grid(offsets):
        raise NotUniformError(
            "Argument 'offsets' to %s() is not an evenly spaced grid" %
            funcname
        )

    return offsets
