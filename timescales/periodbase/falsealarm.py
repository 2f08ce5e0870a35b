#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# falsealarm.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''This contains functions for the significance of Lomb-Scargle periodogram
peaks.

- :py:func:`.ls_threshold`: the periodogram power corresponding to a false
  alarm probability, from white noise simulations.

- :py:func:`.ls_normal_edf`: the empirical distribution of the highest
  periodogram peak in white noise simulations.

- :py:func:`.edf_false_alarm_probability`: reads the false alarm probability
  of a power value off the distribution returned by :py:func:`.ls_normal_edf`.

- :py:func:`.analytic_false_alarm_probability`: the usual independent
  frequency approximation, for comparison.

The simulations keep the real observation times and replace the fluxes with
Gaussian white noise, so they account for the sampling pattern and for the
number of frequencies searched (the "look-elsewhere" effect) without any
asymptotic assumptions. They cost `O(nsims * N * F)`.

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

from numbers import Real
from multiprocessing import cpu_count
from concurrent.futures import ProcessPoolExecutor

import numpy as np
from numpy import (
    array as nparray, max as npmax, quantile as npquantile,
    unique as npunique, cumsum as npcumsum, interp as npinterp,
    exp as npexp, isscalar as npisscalar, isfinite as npisfinite
)

from tqdm import tqdm


###################
## LOCAL IMPORTS ##
###################

from ..exceptions import InvalidArgumentError
from ..lcmath import check_times, check_freqs, as_float_array
from .lsp import _lomb_scargle


############
## CONFIG ##
############

NCPUS = cpu_count()

# the default seed for the white noise simulations
RANDSEED = 0xdecaff


######################
## NOISE SIMULATION ##
######################

def _max_noise_power(task):
    '''This is the worker for a single white noise simulation.

    task[0] = times
    task[1] = freqs
    task[2] = the numpy SeedSequence for this simulation

    Returns the highest periodogram power over the frequency grid.

    '''

    times, freqs, seedseq = task

    rng = np.random.default_rng(seedseq)
    noise = rng.standard_normal(times.size)

    return npmax(_lomb_scargle(times, noise, freqs))


def _check_nsims(nsims, funcname):
    '''
    Makes sure the number of simulations is a positive integer.

    '''

    if (isinstance(nsims, bool) or
            not isinstance(nsims, Real) or
            not npisfinite(nsims) or
            int(nsims) != nsims or
            nsims < 1):
        raise InvalidArgumentError(
            "Argument 'nsims' to %s() must be a positive integer "
            "(gave %s)" % (funcname, nsims)
        )

    return int(nsims)


def _check_sims_inputs(times, freqs, nsims, funcname):
    '''
    Runs the same checks the periodogram does on the sampling and the grid,
    plus the checks on the simulation count.

    '''

    nsims = _check_nsims(nsims, funcname)
    times = check_times(times, funcname)
    freqs = check_freqs(freqs, funcname)

    if freqs.size == 0:
        raise InvalidArgumentError(
            "Argument 'freqs' to %s() is empty" % funcname
        )

    return times, freqs, nsims


def simulate_max_powers(times,
                        freqs,
                        nsims,
                        seed=RANDSEED,
                        nworkers=None,
                        verbose=False):
    '''This runs white noise simulations at the given observation times and
    returns the highest periodogram power from each simulation.

    Each simulation draws its noise from its own child of
    `numpy.random.SeedSequence(seed)`, so the result only depends on `seed`,
    and not on how the simulations are spread over the workers.

    Parameters
    ----------

    times : array-like
        The observation times. Must be sorted in ascending order and contain at
        least two unique values.

    freqs : array-like
        The frequency grid. All frequencies must be positive.

    nsims : int
        The number of simulations to run.

    seed : int or None
        The seed for the simulations. If None, fresh entropy is drawn from the
        OS and the results are not reproducible.

    nworkers : int or None
        The number of parallel worker processes to use. If None or 1, the
        simulations run serially in this process.

    verbose : bool
        If True, will report progress.

    Returns
    -------

    np.array
        The highest periodogram power from each simulation, in simulation
        order.

    '''

    times, freqs, nsims = _check_sims_inputs(times, freqs, nsims,
                                             'simulate_max_powers')

    return _run_simulations(times, freqs, nsims, seed, nworkers, verbose)


def _run_simulations(times, freqs, nsims, seed, nworkers, verbose):
    '''
    This runs the simulations on already checked inputs.

    '''

    childseeds = np.random.SeedSequence(seed).spawn(nsims)
    tasks = [(times, freqs, x) for x in childseeds]

    if nworkers and nworkers > 1:

        if nworkers > NCPUS:
            nworkers = NCPUS

        if verbose:
            LOGINFO('running %s white noise simulations '
                    'using %s workers...' % (nsims, nworkers))

        chunksize = max(1, nsims // (4*nworkers))

        with ProcessPoolExecutor(max_workers=nworkers) as executor:
            maxpowers = list(executor.map(_max_noise_power, tasks,
                                          chunksize=chunksize))

    else:

        if verbose:
            LOGINFO('running %s white noise simulations...' % nsims)
            tasks = tqdm(tasks)

        maxpowers = [_max_noise_power(x) for x in tasks]

    return nparray(maxpowers)


###################################
## SIMULATED SIGNIFICANCE LEVELS ##
###################################

def ls_threshold(times,
                 freqs,
                 fap,
                 nsims,
                 seed=RANDSEED,
                 nworkers=None,
                 verbose=False):
    '''Calculates the significance threshold for a Lomb-Scargle periodogram.

    This runs `nsims` white noise simulations sampled at `times`, records the
    highest periodogram power over `freqs` in each one, and returns the `(1 -
    fap)` quantile of those highest powers. A peak in the real periodogram
    (computed over the same grid) above this threshold has a probability less
    than `fap` of being produced by noise alone.

    Parameters
    ----------

    times : array-like
        The observation times. Must be sorted in ascending order and contain at
        least two unique values.

    freqs : array-like
        The frequency grid that the periodogram is calculated over.

    fap : float
        The false alarm probability of the threshold. Must be between 0 and 1,
        exclusive. Only values `>= 1/nsims` are meaningful.

    nsims : int
        The number of simulations to run. Must be at least 1.

    seed : int or None
        The seed for the simulations.

    nworkers : int or None
        The number of parallel worker processes to use.

    verbose : bool
        If True, will report progress.

    Returns
    -------

    float
        The periodogram power threshold.

    Raises
    ------

    InvalidArgumentError
        If `fap` is not in `(0, 1)` or `nsims < 1`.

    DegenerateInputError, NotSortedError, NegativeFrequencyError
        From the periodogram input checks.

    '''

    times, freqs, nsims = _check_sims_inputs(times, freqs, nsims,
                                             'ls_threshold')

    if not 0.0 < fap < 1.0:
        raise InvalidArgumentError(
            "Argument 'fap' to ls_threshold() must be between 0 and 1 "
            "(gave %s)" % fap
        )

    if fap*nsims < 1.0:
        LOGWARNING('fap = %s is too small to be sampled by %s simulations, '
                   'the threshold will be the largest simulated power' %
                   (fap, nsims))

    maxpowers = _run_simulations(times, freqs, nsims, seed, nworkers, verbose)

    threshold = npquantile(maxpowers, 1.0 - fap)

    if verbose:
        LOGINFO('power threshold for FAP = %s: %.4f' % (fap, threshold))

    return float(threshold)


def ls_normal_edf(times,
                  freqs,
                  nsims,
                  seed=RANDSEED,
                  nworkers=None,
                  verbose=False):
    '''Calculates the empirical distribution function of false peaks for a
    Lomb-Scargle periodogram.

    This is the distribution of the highest periodogram power in white noise
    simulations sampled at `times`, as used by :py:func:`.ls_threshold`. Any
    false alarm probability can be read off it with
    :py:func:`.edf_false_alarm_probability` without rerunning the
    simulations.

    Parameters
    ----------

    times : array-like
        The observation times. Must be sorted in ascending order and contain at
        least two unique values.

    freqs : array-like
        The frequency grid that the periodogram is calculated over.

    nsims : int
        The number of simulations to run. Must be at least 1.

    seed : int or None
        The seed for the simulations.

    nworkers : int or None
        The number of parallel worker processes to use.

    verbose : bool
        If True, will report progress.

    Returns
    -------

    powers,probs : np.arrays
        `powers` is strictly ascending; `probs[i]` is the fraction of
        simulations whose highest power was at most `powers[i]`, so
        `probs[-1] == 1`.

    '''

    times, freqs, nsims = _check_sims_inputs(times, freqs, nsims,
                                             'ls_normal_edf')
    maxpowers = _run_simulations(times, freqs, nsims, seed, nworkers, verbose)

    powers, counts = npunique(maxpowers, return_counts=True)
    probs = npcumsum(counts)/float(maxpowers.size)

    return powers, probs


def edf_false_alarm_probability(power, edfpowers, edfprobs):
    '''This reads the false alarm probability for a power value off an
    empirical distribution function.

    Parameters
    ----------

    power : float or array-like
        The periodogram power value(s).

    edfpowers,edfprobs : array-like
        The distribution returned by :py:func:`.ls_normal_edf`.

    Returns
    -------

    float or np.array
        `1 - EDF(power)`, linearly interpolated between the simulated powers.
        Powers below the smallest simulated value get 1.0, powers above the
        largest get 0.0.

    '''

    edfpowers = as_float_array(edfpowers)
    edfprobs = as_float_array(edfprobs)

    if edfpowers.size == 0 or edfpowers.size != edfprobs.size:
        raise InvalidArgumentError(
            "Arguments 'edfpowers' and 'edfprobs' to "
            "edf_false_alarm_probability() must be non-empty and the same "
            "length (gave %s and %s)" % (edfpowers.size, edfprobs.size)
        )

    fap = 1.0 - npinterp(power, edfpowers, edfprobs, left=0.0, right=1.0)

    if npisscalar(power):
        return float(fap)
    else:
        return fap


######################################
## ANALYTIC FALSE ALARM PROBABILITY ##
######################################

def independent_freq_count(freqs, times):
    '''This estimates the number of independent frequencies in a periodogram.

    Follows Schwarzenberg-Czerny (2003) and takes the conservative estimate::

        M = min(N_obs, N_freq, DELTA_f/delta_f)

    where `DELTA_f` is the frequency range searched and `delta_f = 1/T`. The
    result is never less than 1.

    '''

    times = as_float_array(times)
    freqs = as_float_array(freqs)

    M = (freqs.max() - freqs.min())*(times.max() - times.min())

    return max(1.0, min(times.size, freqs.size, M))


def analytic_false_alarm_probability(power, times, freqs):
    '''This returns the analytic false alarm probability of periodogram power
    values::

        FAP = 1 - (1 - exp(-z))**M

    where `exp(-z)` is the probability of a single independent frequency
    exceeding the normalized power `z`, and `M` comes from
    :py:func:`.independent_freq_count`. This ignores the details of the
    sampling, which :py:func:`.ls_threshold` takes into account.

    Parameters
    ----------

    power : float or array-like
        The periodogram power value(s), normalized as in
        :py:func:`timescales.periodbase.lsp.lomb_scargle`.

    times : array-like
        The observation times of the periodogram.

    freqs : array-like
        The frequency grid of the periodogram.

    Returns
    -------

    float or np.array
        The false alarm probabilities.

    '''

    times = check_times(times, 'analytic_false_alarm_probability',
                        needsorted=False)
    freqs = check_freqs(freqs, 'analytic_false_alarm_probability')

    if freqs.size == 0:
        raise InvalidArgumentError(
            "Argument 'freqs' to analytic_false_alarm_probability() is empty"
        )

    M = independent_freq_count(freqs, times)
    fap = 1.0 - (1.0 - npexp(-np.asarray(power, dtype=np.float64)))**M

    if npisscalar(power):
        return float(fap)
    else:
        return fap
