#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# varbase - Oct 2026

'''Contains functions to characterize light curve variability without assuming
it's periodic, and to find peaks in periodograms and correlation functions.

- :py:mod:`timescales.varbase.peaks`: finding prominent local maxima of sampled
  series.
- :py:mod:`timescales.varbase.autocorr`: calculating the autocorrelation
  function of light curves and of their sampling patterns.
- :py:mod:`timescales.varbase.dmdt`: calculating Δm-Δt pair diagrams and
  summarizing them in Δt bins.

'''

# peaks goes first: periodbase.lsp imports it while varbase.autocorr imports
# periodbase
from .peaks import peak_find
from .autocorr import auto_corr, ac_window
from .dmdt import dmdt, hiamp_bin_frac, deltam_bin_quantile
