'''test_peaks.py - Oct 2026
License: MIT - see the LICENSE file for details.

This tests the following:

- varbase.peak_find on small hand-checked series
- plateaus, non-finite values, unsorted and mismatched inputs
- agreement with scipy.signal.find_peaks on a decaying sinusoid, where both
  definitions of prominence coincide

'''

import numpy as np
from numpy.testing import assert_allclose

from scipy.signal import find_peaks

from timescales import varbase


###########
## TESTS ##
###########

def test_peak_find_simple():
    '''
    Tests the minimum prominence cut on a short series.

    '''

    xs = np.arange(5.0)
    ys = np.array([0.0, 3.0, 1.0, 4.0, 0.0])

    peakxs, peakys = varbase.peak_find(xs, ys, 0.5)
    assert_allclose(peakxs, [1.0, 3.0])
    assert_allclose(peakys, [3.0, 4.0])

    # prominences are 2 and 3
    peakxs, peakys = varbase.peak_find(xs, ys, 2.5)
    assert_allclose(peakxs, [3.0])

    peakxs, peakys = varbase.peak_find(xs, ys, 5.0)
    assert peakxs.size == 0
    assert peakys.size == 0


def test_peak_find_plateaus():
    '''
    Tests that a flat-topped peak is reported at its first point.

    '''

    xs = np.arange(5.0)

    peakxs, peakys = varbase.peak_find(xs, [0.0, 2.0, 2.0, 2.0, 0.0], 0.0)
    assert_allclose(peakxs, [1.0])
    assert_allclose(peakys, [2.0])

    # a plateau on the way up isn't a peak
    peakxs, _ = varbase.peak_find(xs, [0.0, 2.0, 2.0, 3.0, 0.0], 0.0)
    assert_allclose(peakxs, [3.0])


def test_peak_find_no_peaks():
    '''
    Tests series without any peaks.

    '''

    for ys in ([], [1.0], [1.0, 2.0], [1.0, 2.0, 3.0, 4.0],
               [4.0, 3.0, 2.0], [1.0, 1.0, 1.0], [np.nan]*5):

        peakxs, peakys = varbase.peak_find(np.arange(float(len(ys))), ys, 0.0)

        assert peakxs.size == 0
        assert peakys.size == 0


def test_peak_find_messy_input():
    '''
    Tests non-finite values, unsorted locations and mismatched lengths.

    '''

    # the nan is dropped before searching
    peakxs, _ = varbase.peak_find(np.arange(6.0),
                                  [0.0, 3.0, np.nan, 1.0, 4.0, 0.0],
                                  0.5)
    assert_allclose(peakxs, [1.0, 4.0])

    # sorted by location first
    peakxs, peakys = varbase.peak_find([4.0, 3.0, 2.0, 1.0, 0.0],
                                       [0.0, 4.0, 1.0, 3.0, 0.0],
                                       0.5)
    assert_allclose(peakxs, [1.0, 3.0])
    assert_allclose(peakys, [3.0, 4.0])

    # the extra location is ignored
    peakxs, _ = varbase.peak_find(np.arange(6.0),
                                  [0.0, 3.0, 1.0, 4.0, 0.0],
                                  0.5)
    assert_allclose(peakxs, [1.0, 3.0])


def test_peak_find_scipy():
    '''
    Tests varbase.peak_find against scipy.signal.find_peaks.

    '''

    xs = np.linspace(0.0, 200.0, 20001)
    ys = np.sin(xs)*np.exp(-xs/20.0)

    for minprominence in (0.0, 0.05, 0.5):

        peakxs, peakys = varbase.peak_find(xs, ys, minprominence)
        scipyind, _ = find_peaks(ys, prominence=minprominence)

        assert peakxs.size > 0
        assert peakxs.size == scipyind.size
        assert_allclose(peakxs, xs[scipyind], rtol=1.0e-5)
        assert_allclose(peakys, ys[scipyind], rtol=1.0e-5)
