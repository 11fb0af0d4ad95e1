#!/usr/bin/python3
# Copyright (C) 2024 Ralf Schlatterbeck. All rights reserved
# Reichergasse 131, A-3411 Weidling
# ****************************************************************************
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
#   The above copyright notice and this permission notice shall be included in
#   all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ****************************************************************************

import sys
import time
import numpy as np
from scipy.integrate import cumulative_trapezoid

def cumtrapz (x, f):
    """ Cumulative trapezoidal integral of the values f sampled at x.
        The result has the same length as x and starts with 0.
    >>> x = np.array ([0.0, 1.0, 3.0])
    >>> cumtrapz (x, np.array ([2.0, 2.0, 2.0]))
    array([0., 2., 6.])
    >>> cumtrapz (x, np.ones (2))
    Traceback (most recent call last):
    ...
    ValueError: x and f must have the same length
    """
    x = np.asarray (x, dtype = float)
    f = np.asarray (f, dtype = float)
    if x.shape != f.shape:
        raise ValueError ("x and f must have the same length")
    return cumulative_trapezoid (f, x, initial = 0)
# end def cumtrapz

def measure_time (method):
    """ Decorator for time measurement
        Needs member variable do_timing in calling class
    """
    def timer (self, *args, **kw):
        if self.do_timing:
            start_time = time.time ()
            retval = method (self, *args, **kw)
            end_time = time.time ()
            print \
                ( 'Time %7.3f for %s'
                % (end_time - start_time, method.__name__)
                , file = sys.stderr
                )
            return retval
        return method (self, *args, **kw)
    # end def timer
    return timer
# end measure_time

def parse_floatlist (s, l = 3, fill = None):
    """ Parse comma-separated list of floats with length l.
        Missing values are filled with the value of fill.
    >>> parse_floatlist ('1,,3.5', fill = 0.0)
    [1.0, 0.0, 3.5]
    """
    r = [float (x) if x else fill for x in s.split (',')]
    if len (r) != l:
        raise ValueError ("Expected %d comma-separated values: %s" % (l, s))
    return r
# end def parse_floatlist
