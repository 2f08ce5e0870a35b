#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# exceptions.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''This contains the exceptions raised by the timescales functions.

All of them derive from :py:class:`.TimescalesError`, which is itself a
`ValueError`, so pipelines can either catch the specific problem or skip any
light curve the library refuses to process::

    try:
        power = periodbase.lomb_scargle(times, fluxes, freqs)
    except TimescalesError as e:
        LOGWARNING('skipping %s: %s' % (objectid, e))

'''


class TimescalesError(ValueError):
    '''Base class for all errors raised by timescales.'''


class DegenerateInputError(TimescalesError):
    '''Raised when a time series has fewer than the minimum required distinct
    samples, e.g. a single unique time value.

    '''


class NotSortedError(TimescalesError):
    '''Raised when an input that must be in ascending order is not.'''


class NotUniformError(TimescalesError):
    '''Raised when a grid that must be evenly spaced is not.'''


class InvalidArgumentError(TimescalesError):
    '''Raised for mismatched lengths and out-of-range parameters.'''


class NegativeFrequencyError(InvalidArgumentError):
    '''Raised when a frequency grid contains zero or negative frequencies.'''


class InvalidRangeError(InvalidArgumentError):
    '''Raised when grid limits are inverted or the grid step is not positive.'''
