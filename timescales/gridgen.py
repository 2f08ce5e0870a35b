#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# gridgen.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''This contains functions that derive characteristic frequencies from a
sampling cadence and build the frequency and offset grids fed to the other
timescales functions.

- :py:func:`.delta_t`: the time baseline covered by the data.

- :py:func:`.pseudo_nyquist_freq`: the frequency `N/2T` implied by treating the
  data as if evenly spaced over its baseline.

- :py:func:`.max_freq`: the highest frequency reached by the closest pair of
  observations.

- :py:func:`.freq_gen`: an evenly spaced frequency grid for the DFT and the
  Lomb-Scargle periodogram.

- :py:func:`.offset_gen`: an evenly spaced time-lag grid for the
  autocorrelation functions.

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

from numpy import (
    arange as nparange, floor as npfloor, diff as npdiff, isfinite as npisfinite,
    minimum as npminimum
)


###################
## LOCAL IMPORTS ##
###################

from .exceptions import (
    DegenerateInputError, NotSortedError, InvalidArgumentError,
    InvalidRangeError, NegativeFrequencyError
)
from .lcmath import as_float_array, is_sorted


############
## CONFIG ##
############

# the default number of grid points per independent frequency 1/T
DEFAULT_OVERSAMPLING = 5

# the default longest lag as a fraction of the time baseline
DEFAULT_MAXOFFSETFRAC = 0.5

# tolerance for floating point round-off when deciding if the grid endpoint is
# part of the grid
ENDPOINT_RTOL = 1.0e-9


###########################
## CHARACTERISTIC VALUES ##
###########################

def delta_t(times):
    '''Returns the time interval covered by the data.

    The times do not need to be sorted.

    Parameters
    ----------

    times : array-like
        The times at which the data were taken.

    Returns
    -------

    float
        `max(times) - min(times)`, in the units of `times`.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than 2 elements or only one unique value.

    '''

    times = as_float_array(times)

    if times.size < 2:
        raise DegenerateInputError(
            "Argument 'times' to delta_t() contains fewer than 2 "
            "observations"
        )

    tmin, tmax = times.min(), times.max()

    if tmax <= tmin:
        raise DegenerateInputError(
            "Argument 'times' to delta_t() contains only one unique value"
        )

    return tmax - tmin


def pseudo_nyquist_freq(times):
    '''Returns the pseudo-Nyquist frequency for a set of observation times.

    This is defined as `N/2T`, where `N` is the number of observations and `T`
    is the baseline returned by :py:func:`.delta_t`. It's the Nyquist frequency
    the data would have if they were evenly spaced.

    Parameters
    ----------

    times : array-like
        The times at which the data were taken.

    Returns
    -------

    float
        The pseudo-Nyquist frequency in the inverse units of `times`.

    '''

    times = as_float_array(times)
    return 0.5 * times.size / delta_t(times)


def max_freq(times):
    '''Returns the highest frequency that can be measured from the data.

    This is `1/2dt`, where `dt > 0` is the smallest interval between two
    consecutive observations. Repeated time values are skipped.

    Parameters
    ----------

    times : array-like
        The times at which the data were taken. These MUST be sorted in
        ascending order.

    Returns
    -------

    float
        The highest meaningful frequency in the inverse units of `times`.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than 2 elements or only one unique value.

    NotSortedError
        If `times` is not in ascending order.

    '''

    times = as_float_array(times)

    if times.size < 2:
        raise DegenerateInputError(
            "Argument 'times' to max_freq() contains fewer than 2 "
            "observations"
        )

    if not is_sorted(times):
        raise NotSortedError(
            "Argument 'times' to max_freq() is not sorted in ascending order"
        )

    gaps = npdiff(times)
    gaps = gaps[gaps > 0.0]

    if gaps.size == 0:
        raise DegenerateInputError(
            "Argument 'times' to max_freq() contains only one unique value"
        )

    return 0.5 / gaps.min()


#####################
## GRID GENERATION ##
#####################

def _even_grid(start, stop, step):
    '''
    Returns `start, start + step, ...` up to and including `stop`, allowing for
    round-off in the last step.

    '''

    nsteps = int(npfloor((stop - start)/step * (1.0 + ENDPOINT_RTOL) +
                         ENDPOINT_RTOL))
    grid = start + step*nparange(nsteps + 1)

    # round-off can push the last point a hair past the end
    return npminimum(grid, stop)


def freq_gen(times,
             fmin=None,
             fmax=None,
             fstep=None,
             oversampling=DEFAULT_OVERSAMPLING,
             fmaxmethod='pseudonyquist',
             verbose=False):
    '''This makes an evenly spaced frequency grid for the time series functions.

    The grid is `fmin, fmin + fstep, fmin + 2*fstep, ...` up to and including
    `fmax`. Any limit left as None gets a default based on the time sampling:

    - `fmin = 1/T`, the lowest frequency completing a full cycle over the
      baseline `T` (see :py:func:`.delta_t`), or `fmax` if that is
      lower

    - `fmax` is the pseudo-Nyquist frequency (:py:func:`.pseudo_nyquist_freq`)
      if `fmaxmethod = 'pseudonyquist'`, or the highest frequency reached by the
      closest pair of observations (:py:func:`.max_freq`) if `fmaxmethod =
      'maxfreq'`

    - `fstep = 1/(oversampling*T)`, so every periodogram peak of width `~1/T`
      is covered by `oversampling` grid points

    The default grid can always be passed straight to the DFT, Lomb-Scargle
    and false alarm functions.

    Parameters
    ----------

    times : array-like
        The times at which the data were taken.

    fmin,fmax : float or None
        The limits of the frequency grid.

    fstep : float or None
        The spacing of the grid.

    oversampling : float
        The number of grid points per `1/T` used for the default `fstep`. Must
        be at least 1.

    fmaxmethod : {'pseudonyquist', 'maxfreq'}
        Which characteristic frequency to use for the default `fmax`. Using
        'maxfreq' requires sorted `times`.

    verbose : bool
        If True, will report the grid that was generated.

    Returns
    -------

    np.array
        The frequency grid, in the inverse units of `times`.

    Raises
    ------

    DegenerateInputError
        If `times` has fewer than two unique values.

    InvalidRangeError
        If a given `fmin` is above `fmax`, `fstep <= 0`, or `oversampling <
        1`.

    NegativeFrequencyError
        If `fmin <= 0`.

    InvalidArgumentError
        If `fmaxmethod` is not recognized.

    '''

    times = as_float_array(times)
    baseline = delta_t(times)

    if not oversampling >= 1.0:
        raise InvalidRangeError(
            "Argument 'oversampling' to freq_gen() must be at least 1 "
            "(gave %s)" % oversampling
        )

    if fmax is None:
        if fmaxmethod == 'pseudonyquist':
            fmax = pseudo_nyquist_freq(times)
        elif fmaxmethod == 'maxfreq':
            fmax = max_freq(times)
        else:
            raise InvalidArgumentError(
                "Argument 'fmaxmethod' to freq_gen() must be one of "
                "'pseudonyquist' or 'maxfreq' (gave %r)" % (fmaxmethod,)
            )

    # the closest pair of a two-time sampling can put fmax below 1/T; the
    # default grid is then the single frequency fmax
    if fmin is None:
        fmin = min(1.0/baseline, fmax)

    if fstep is None:
        fstep = 1.0/(oversampling*baseline)

    if not (npisfinite(fstep) and fstep > 0.0):
        raise InvalidRangeError(
            "Argument 'fstep' to freq_gen() must be positive (gave %s)" % fstep
        )
    if not fmin > 0.0:
        raise NegativeFrequencyError(
            "Argument 'fmin' to freq_gen() must be positive (gave %s)" % fmin
        )
    if fmin > fmax:
        raise InvalidRangeError(
            "Arguments 'fmin' = %s and 'fmax' = %s to freq_gen() are "
            "inverted" % (fmin, fmax)
        )

    freqs = _even_grid(fmin, fmax, fstep)

    if verbose:
        LOGINFO('frequency grid: %s points from %.6g to %.6g, step = %.6g' %
                (freqs.size, freqs[0], freqs[-1], fstep))

    return freqs


def offset_gen(times,
               offmin=0.0,
               offmax=None,
               offstep=None,
               maxoffsetfrac=DEFAULT_MAXOFFSETFRAC,
               verbose=False):
    '''This makes an evenly spaced time-lag grid for the autocorrelation
    functions.

    Parameters
    ----------

    times : array-like
        The times at which the data were taken.

    offmin : float
        The smallest lag in the grid. Must not be negative.

    offmax : float or None
        The largest lag in the grid. If None, this is `maxoffsetfrac` times the
        baseline; pairs get scarce for lags approaching the full baseline.

    offstep : float or None
        The spacing of the grid. If None, this is the mean cadence `T/N`, which
        is the inverse of twice the pseudo-Nyquist frequency.

    maxoffsetfrac : float
        Used for the default `offmax`.

    verbose : bool
        If True, will report the grid that was generated.

    Returns
    -------

    np.array
        The offset grid, in the units of `times`.

    '''

    times = as_float_array(times)
    baseline = delta_t(times)

    if offmax is None:
        offmax = maxoffsetfrac*baseline
    if offstep is None:
        offstep = baseline/times.size

    if not (npisfinite(offstep) and offstep > 0.0):
        raise InvalidRangeError(
            "Argument 'offstep' to offset_gen() must be positive (gave %s)" %
            offstep
        )
    if offmin < 0.0:
        raise InvalidRangeError(
            "Argument 'offmin' to offset_gen() must not be negative "
            "(gave %s)" % offmin
        )
    if offmin > offmax:
        raise InvalidRangeError(
            "Arguments 'offmin' = %s and 'offmax' = %s to offset_gen() are "
            "inverted" % (offmin, offmax)
        )

    offsets = _even_grid(offmin, offmax, offstep)

    if verbose:
        LOGINFO('offset grid: %s lags from %.6g to %.6g, step = %.6g' %
                (offsets.size, offsets[0], offsets[-1], offstep))

    return offsets
