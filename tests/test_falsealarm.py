'''test_falsealarm.py - Oct 2026
License: MIT - see the LICENSE file for details.

This tests the following:

- periodbase.ls_threshold on independent white noise trials
- the empirical distribution from periodbase.ls_normal_edf and reading false
  alarm probabilities off it
- reproducibility of the simulations across seeds and worker counts
- the analytic false alarm probability
- the input checks of the simulation functions

'''

import numpy as np
from numpy.testing import assert_allclose
import pytest

from timescales import gridgen, periodbase
from timescales.periodbase import falsealarm
from timescales.exceptions import (
    DegenerateInputError, NotSortedError, InvalidArgumentError,
    NegativeFrequencyError
)


############
## CONFIG ##
############

def make_sampling(seed, nobs=60, baseline=20.0):
    '''
    This makes random observation times and the default frequency grid.

    '''

    rng = np.random.default_rng(seed)
    times = np.sort(rng.uniform(0.0, baseline, size=nobs))
    freqs = gridgen.freq_gen(times)

    return times, freqs


###########
## TESTS ##
###########

def test_ls_threshold_white_noise():
    '''
    Tests that fresh white noise exceeds the 1% threshold about 1% of the time.

    '''

    times, freqs = make_sampling(7)

    threshold = periodbase.ls_threshold(times, freqs, 0.01, 2000, seed=1)

    rng = np.random.default_rng(99)
    ntrials = 1000
    nexceed = 0

    for _ in range(ntrials):
        noise = rng.standard_normal(times.size)
        if periodbase.lomb_scargle(times, noise, freqs).max() > threshold:
            nexceed += 1

    # about 10 are expected
    assert 2 <= nexceed <= 25


def test_ls_threshold_ordering():
    '''
    Tests that a smaller false alarm probability needs a higher power.

    '''

    times, freqs = make_sampling(8)

    loose = periodbase.ls_threshold(times, freqs, 0.5, 200, seed=3)
    strict = periodbase.ls_threshold(times, freqs, 0.05, 200, seed=3)

    assert isinstance(strict, float)
    assert 0.0 < loose < strict


def test_ls_normal_edf():
    '''
    Tests the shape of the empirical distribution of maximum powers.

    '''

    times, freqs = make_sampling(9)
    nsims = 300

    powers, probs = periodbase.ls_normal_edf(times, freqs, nsims, seed=4)

    assert powers.size == probs.size
    assert 0 < powers.size <= nsims
    assert np.all(np.diff(powers) > 0.0)
    assert np.all(np.diff(probs) > 0.0)
    assert np.all(probs > 0.0)
    assert_allclose(probs[-1], 1.0)

    # the same simulations give the threshold
    threshold = periodbase.ls_threshold(times, freqs, 0.1, nsims, seed=4)
    assert powers[0] <= threshold <= powers[-1]


def test_simulations_reproducible():
    '''
    Tests that the simulations only depend on the seed.

    '''

    times, freqs = make_sampling(10)

    first = periodbase.simulate_max_powers(times, freqs, 24, seed=5)
    again = periodbase.simulate_max_powers(times, freqs, 24, seed=5)
    other = periodbase.simulate_max_powers(times, freqs, 24, seed=6)
    parallel = periodbase.simulate_max_powers(times, freqs, 24, seed=5,
                                              nworkers=2)

    assert first.size == 24
    assert_allclose(again, first)
    assert_allclose(parallel, first)
    assert not np.allclose(other, first)


def test_edf_false_alarm_probability():
    '''
    Tests reading false alarm probabilities off an EDF.

    '''

    powers = np.array([1.0, 2.0, 3.0])
    probs = np.array([1.0, 2.0, 3.0])/3.0

    assert_allclose(
        periodbase.edf_false_alarm_probability(2.0, powers, probs),
        1.0/3.0
    )
    assert periodbase.edf_false_alarm_probability(0.5, powers, probs) == 1.0
    assert periodbase.edf_false_alarm_probability(10.0, powers, probs) == 0.0

    faps = periodbase.edf_false_alarm_probability([1.5, 3.0], powers, probs)
    assert_allclose(faps, [0.5, 0.0])

    with pytest.raises(InvalidArgumentError):
        periodbase.edf_false_alarm_probability(1.0, powers, probs[:2])


def test_analytic_false_alarm_probability():
    '''
    Tests the independent frequency approximation.

    '''

    times = np.arange(100.0)
    freqs = np.linspace(0.01, 0.5, 1000)

    nindep = falsealarm.independent_freq_count(freqs, times)
    assert_allclose(nindep, 0.49*99.0)

    fap = periodbase.analytic_false_alarm_probability(5.0, times, freqs)
    assert_allclose(fap, 1.0 - (1.0 - np.exp(-5.0))**nindep)

    faps = periodbase.analytic_false_alarm_probability([0.0, 5.0, 20.0],
                                                       times, freqs)
    assert_allclose(faps[0], 1.0)
    assert np.all(np.diff(faps) < 0.0)
    assert faps[-1] < 1.0e-6


def test_simulation_errors():
    '''
    Tests the exceptions raised by the simulation functions.

    '''

    times, freqs = make_sampling(12, nobs=20)

    with pytest.raises(InvalidArgumentError):
        periodbase.ls_threshold(times, freqs, 0.01, 0)

    with pytest.raises(InvalidArgumentError):
        periodbase.ls_threshold(times, freqs, 0.01, 2.5)

    with pytest.raises(InvalidArgumentError):
        periodbase.ls_normal_edf(times, freqs, 0)

    for badnsims in (float('nan'), float('inf'), None, '100', True):
        with pytest.raises(InvalidArgumentError):
            periodbase.ls_threshold(times, freqs, 0.01, badnsims)
        with pytest.raises(InvalidArgumentError):
            periodbase.simulate_max_powers(times, freqs, badnsims)

    # integral floats and numpy integers are fine
    assert periodbase.simulate_max_powers(times, freqs, 3.0).size == 3
    assert periodbase.simulate_max_powers(times, freqs, np.int64(2)).size == 2

    for badfap in (0.0, 1.0, 1.5, -0.1):
        with pytest.raises(InvalidArgumentError):
            periodbase.ls_threshold(times, freqs, badfap, 10)

    with pytest.raises(NotSortedError):
        periodbase.ls_threshold(times[::-1], freqs, 0.01, 10)

    with pytest.raises(DegenerateInputError):
        periodbase.ls_normal_edf(np.ones(10), freqs, 10)

    with pytest.raises(NegativeFrequencyError):
        periodbase.ls_normal_edf(times, -freqs, 10)

    with pytest.raises(InvalidArgumentError):
        periodbase.simulate_max_powers(times, [], 10)
