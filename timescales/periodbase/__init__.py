#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# periodbase - Oct 2026

'''This top-level module hoists the spectral functions up into the
``timescales.periodbase`` namespace, so you can do::

    from timescales import periodbase
    periodbase.<name of function>

- :py:mod:`timescales.periodbase.dft`: the discrete Fourier transform of
  irregularly sampled time series.
- :py:mod:`timescales.periodbase.lsp`: the Lomb-Scargle periodogram and a
  period search wrapper around it.
- :py:mod:`timescales.periodbase.falsealarm`: significance thresholds and
  false alarm probabilities for periodogram peaks.

'''

from .dft import dft
from .lsp import lomb_scargle, lsp_periodfind
from .falsealarm import (
    ls_threshold, ls_normal_edf, simulate_max_powers,
    edf_false_alarm_probability, analytic_false_alarm_probability
)
