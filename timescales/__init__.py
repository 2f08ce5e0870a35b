# -*- coding: utf-8 -*-

__version__ = '1.0.0'


# the basic logging styles common to all timescales modules
log_sub = '{'
log_fmt = '[{levelname:1.1} {asctime} {module}:{lineno}] {message}'
log_date_fmt = '%y%m%d %H:%M:%S'
