'''test_periodbase.py - Oct 2026
License: MIT - see the LICENSE file for details.

This tests the following:

- periodbase.dft on known signals and against a direct evaluation
- periodbase.lomb_scargle against astropy's LombScargle (slow method, no
  floating mean, centered data)
- periodbase.lsp_periodfind on a noisy sinusoid
- that the default grids from gridgen are accepted by the spectral functions

'''

import numpy as np
from numpy.testing import assert_allclose
import pytest

from astropy.timeseries import LombScargle

from timescales import gridgen, periodbase
from timescales.periodbase.dft import trig_blocks
from timescales.exceptions import (
    DegenerateInputError, NotSortedError, InvalidArgumentError,
    NegativeFrequencyError
)


############
## CONFIG ##
############

def make_sinusoid_lc(seed, nobs=300, baseline=100.0, period=3.7,
                     amplitude=1.0, noise=0.3):
    '''
    This makes a randomly sampled sinusoidal light curve with white noise.

    '''

    rng = np.random.default_rng(seed)
    times = np.sort(rng.uniform(0.0, baseline, size=nobs))
    fluxes = (amplitude*np.sin(2.0*np.pi*times/period) +
              noise*rng.standard_normal(nobs))

    return times, fluxes


###########
## TESTS ##
###########

def test_dft_constant_signal():
    '''
    Tests periodbase.dft of a constant on an even cadence.

    Frequencies that aren't multiples of the sampling rate have no power, and
    the sampling rate itself aliases to zero frequency.

    '''

    times = np.arange(4.0)
    fluxes = np.ones(4)

    transform = periodbase.dft(times, fluxes, [0.25, 0.5, 0.75, 1.0])

    assert transform.dtype == np.complex128
    assert_allclose(np.abs(transform[:3]), 0.0, atol=1.0e-12)
    assert_allclose(np.abs(transform[3]), 4.0)


def test_dft_direct():
    '''
    Tests periodbase.dft against the direct sum, with a time offset.

    '''

    rng = np.random.default_rng(11)
    times = np.sort(rng.uniform(0.0, 10.0, size=50)) + 3.0
    fluxes = rng.standard_normal(50)
    freqs = np.linspace(0.05, 2.5, 40)

    expected = np.exp(-2.0j*np.pi*np.outer(freqs, times)).dot(fluxes)
    transform = periodbase.dft(times, fluxes, freqs)

    assert_allclose(transform, expected, rtol=1.0e-9, atol=1.0e-9)


def test_trig_blocks():
    '''
    Tests that trig_blocks covers the frequency grid in bounded blocks.

    '''

    times = np.linspace(0.0, 1.0, 3)
    freqs = np.arange(1.0, 11.0)

    covered = []
    for blockslice, cosphase, sinphase in trig_blocks(times, freqs,
                                                      maxblockelems=7):
        assert cosphase.size <= 7
        assert cosphase.shape == sinphase.shape
        assert cosphase.shape[1] == times.size
        covered.extend(freqs[blockslice])

        assert_allclose(cosphase,
                        np.cos(2.0*np.pi*np.outer(freqs[blockslice], times)),
                        atol=1.0e-12)

    assert_allclose(covered, freqs)


def test_dft_errors():
    '''
    Tests the exceptions raised by periodbase.dft, in order.

    '''

    with pytest.raises(DegenerateInputError):
        periodbase.dft([1.0, 1.0, 1.0], [1.0, 2.0, 3.0], [0.1])

    with pytest.raises(NotSortedError):
        periodbase.dft([2.0, 1.0, 3.0], [1.0, 2.0, 3.0], [-0.1])

    with pytest.raises(InvalidArgumentError):
        periodbase.dft([0.0, 1.0, 2.0], [1.0, 2.0], [-0.1])

    with pytest.raises(NegativeFrequencyError):
        periodbase.dft([0.0, 1.0, 2.0], [1.0, 2.0, 3.0], [0.1, 0.0])


def test_lomb_scargle_astropy():
    '''
    Tests periodbase.lomb_scargle against astropy.

    Without a floating mean, astropy's standard normalization is our power
    times 2/(N - 1).

    '''

    times, fluxes = make_sinusoid_lc(3, nobs=150, baseline=50.0)
    freqs = gridgen.freq_gen(times)

    power = periodbase.lomb_scargle(times, fluxes, freqs)

    reference = LombScargle(
        times, fluxes,
        fit_mean=False, center_data=True, normalization='standard'
    ).power(freqs, method='slow')

    assert_allclose(power, 0.5*(times.size - 1)*reference,
                    rtol=1.0e-6, atol=1.0e-9)


def test_lomb_scargle_time_shift():
    '''
    Tests that the periodogram doesn't depend on the time origin.

    '''

    times, fluxes = make_sinusoid_lc(5, nobs=80, baseline=30.0)
    freqs = gridgen.freq_gen(times)

    power = periodbase.lomb_scargle(times, fluxes, freqs)
    shifted = periodbase.lomb_scargle(times + 2450000.0, fluxes, freqs)

    assert np.all(power >= 0.0)
    assert_allclose(shifted, power, rtol=1.0e-5, atol=1.0e-6)


def test_lomb_scargle_white_noise_mean():
    '''
    Tests that white noise gives a mean normalized power near 1.

    '''

    rng = np.random.default_rng(17)
    times = np.sort(rng.uniform(0.0, 200.0, size=400))
    fluxes = rng.standard_normal(400)

    freqs = gridgen.freq_gen(times)
    power = periodbase.lomb_scargle(times, fluxes, freqs)

    assert 0.8 < power.mean() < 1.2


def test_lomb_scargle_errors():
    '''
    Tests the exceptions raised by periodbase.lomb_scargle.

    '''

    times = np.arange(5.0)

    with pytest.raises(DegenerateInputError):
        periodbase.lomb_scargle(times, np.full(5, 3.0), [0.1, 0.2])

    with pytest.raises(NotSortedError):
        periodbase.lomb_scargle(times[::-1], np.arange(5.0), [0.1, 0.2])

    with pytest.raises(InvalidArgumentError):
        periodbase.lomb_scargle(times, np.arange(4.0), [0.1, 0.2])

    with pytest.raises(InvalidArgumentError):
        periodbase.lomb_scargle(times, [1.0, np.nan, 2.0, 0.0, 1.0],
                                [0.1, 0.2])

    with pytest.raises(InvalidArgumentError):
        periodbase.lsp_periodfind(times, [1.0, 2.0, np.inf, 0.0, 1.0],
                                  freqs=[0.1, 0.2], verbose=False)

    with pytest.raises(NegativeFrequencyError):
        periodbase.lomb_scargle(times, np.arange(5.0), [-0.1, 0.2])


def test_lsp_periodfind():
    '''
    Tests periodbase.lsp_periodfind on a noisy sinusoid.

    '''

    times, fluxes = make_sinusoid_lc(42)

    lsp = periodbase.lsp_periodfind(times, fluxes, nbestpeaks=3,
                                    verbose=False)

    assert isinstance(lsp, dict)
    assert lsp['method'] == 'ls'
    assert_allclose(lsp['bestperiod'], 3.7, rtol=1.0e-2)

    assert len(lsp['nbestperiods']) == 3
    assert len(lsp['nbestlspvals']) == 3
    assert_allclose(lsp['nbestperiods'][0], lsp['bestperiod'])
    assert np.all(np.diff(lsp['nbestlspvals']) <= 0.0)

    assert lsp['lspvals'].size == lsp['freqs'].size
    assert_allclose(lsp['periods'], 1.0/lsp['freqs'])


def test_default_grid_round_trip():
    '''
    Tests that default grids always go straight into the spectral functions.

    '''

    rng = np.random.default_rng(2024)

    for nobs in (2, 3, 10, 57, 200):

        times = np.sort(rng.uniform(-50.0, 50.0, size=nobs))
        fluxes = rng.standard_normal(nobs)

        for fmaxmethod in ('pseudonyquist', 'maxfreq'):

            freqs = gridgen.freq_gen(times, fmaxmethod=fmaxmethod)

            assert freqs.size > 0
            assert np.all(freqs > 0.0)

            power = periodbase.lomb_scargle(times, fluxes, freqs)
            transform = periodbase.dft(times, fluxes, freqs)

            assert power.size == freqs.size
            assert transform.size == freqs.size
            assert np.all(np.isfinite(power))

    # repeated times are fine too
    times = np.array([0.0, 0.0, 1.0, 2.0, 2.0, 5.0])
    fluxes = rng.standard_normal(times.size)
    freqs = gridgen.freq_gen(times, fmaxmethod='maxfreq')

    assert np.all(periodbase.lomb_scargle(times, fluxes, freqs) >= 0.0)
