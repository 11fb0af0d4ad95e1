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

import numpy as np
from scipy                 import differentiate
from scipy.special         import erf
from scipy.interpolate     import InterpolatedUnivariateSpline
from dipolerad.util        import cumtrapz

def masked (t, mask, fun):
    """ Evaluate fun only where mask is set, the result is 0 elsewhere.
        Returns a scalar for a scalar t.
    """
    r = np.zeros (t.shape)
    if mask.any ():
        r [mask] = fun (t [mask])
    return r [()]
# end def masked

class Current_Waveform:
    """ Current pulse at the injection point of a transmission line
        (delay 0, no attenuation). All methods accept a scalar time or
        a numpy array of times. Before the pulse starts the current, its
        derivative and its integral are exactly 0.
    """

    def current (self, t):
        raise NotImplementedError ("Need a current implementation")
    # end def current

    def derivative (self, t):
        """ Time derivative of the current """
        raise NotImplementedError ("Need a derivative implementation")
    # end def derivative

    def integral (self, t):
        """ Integral of the current from the start of the pulse to t,
            i.e. the charge moved through the dipole.
        """
        raise NotImplementedError ("Need an integral implementation")
    # end def integral

# end class Current_Waveform

class Function_Current (Current_Waveform):
    """ Current pulse given by an arbitrary function of time.
        The function is evaluated directly, the derivative is computed
        numerically. For the integral we sample the function in [mint,
        maxt] with step dt once and interpolate linearly in the table
        of the cumulative trapezoidal integral. After maxt the integral
        stays at its value at maxt.
    >>> f = Function_Current (lambda t: 1.0, 0.0, 10.0, 0.01)
    >>> print (round (float (f.integral (5.0)), 9))
    5.0
    >>> print (round (float (f.integral (20.0)), 9))
    10.0
    """

    def __init__ (self, func, mint, maxt, dt):
        if dt <= 0:
            raise ValueError ("Time step dt must be > 0")
        if maxt <= mint:
            raise ValueError ("maxt must be larger than mint")
        self.func  = func
        self.vfunc = np.vectorize (func, otypes = [float])
        self.mint  = mint
        self.maxt  = maxt
        self.dt    = dt
        # The grid extends one step beyond maxt
        n = int (np.round ((maxt - mint) / dt)) + 2
        self.t_table = mint + dt * np.arange (n)
        self.i_table = cumtrapz (self.t_table, self.vfunc (self.t_table))
    # end def __init__

    def current (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > self.mint, self.vfunc)
    # end def current

    def derivative (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > self.mint, self._derivative)
    # end def derivative

    def integral (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > self.mint, self._integral)
    # end def integral

    def _derivative (self, t):
        r = differentiate.derivative (self.vfunc, t, initial_step = self.dt)
        return r.df
    # end def _derivative

    def _integral (self, t):
        t = np.minimum (t, self.maxt)
        return np.interp (t, self.t_table, self.i_table)
    # end def _integral

# end class Function_Current

class Bi_Gaussian_Current (Current_Waveform):
    """ Current pulse with a bi-gaussian profile:
        i0 * (exp (-t**2 / tau1**2) - exp (-t**2 / tau2**2)) for t > 0.
        tau1 is the time scale of the decaying term, tau2 the time
        scale of the rising term. Derivative and integral are exact.
    >>> p = Bi_Gaussian_Current (10e3, 2e-6, 0.5e-6)
    >>> print (p.current (-1e-6), p.derivative (0.0), p.integral (0.0))
    0.0 0.0 0.0
    >>> print (p.current (np.array ([-1.0, 0.0])))
    [0. 0.]
    """

    def __init__ (self, i0, tau1, tau2):
        if tau1 <= 0 or tau2 <= 0:
            raise ValueError ("Time scales tau1 and tau2 must be > 0")
        self.i0   = i0
        self.tau1 = tau1
        self.tau2 = tau2
    # end def __init__

    def current (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > 0, self._current)
    # end def current

    def derivative (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > 0, self._derivative)
    # end def derivative

    def integral (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, t > 0, self._integral)
    # end def integral

    def _current (self, t):
        t1, t2 = self.tau1, self.tau2
        return self.i0 * (np.exp (-t**2 / t1**2) - np.exp (-t**2 / t2**2))
    # end def _current

    def _derivative (self, t):
        t1, t2 = self.tau1, self.tau2
        return self.i0 * \
            ( -2 * t * np.exp (-t**2 / t1**2) / t1**2
            +  2 * t * np.exp (-t**2 / t2**2) / t2**2
            )
    # end def _derivative

    def _integral (self, t):
        t1, t2 = self.tau1, self.tau2
        return 0.5 * np.sqrt (np.pi) * self.i0 \
            * (t1 * erf (t / t1) - t2 * erf (t / t2))
    # end def _integral

# end class Bi_Gaussian_Current

class Spline_Current (Current_Waveform):
    """ Current pulse given by discrete samples (t, i), interpolated
        with a cubic spline. Current and derivative are 0 outside the
        open interval (tmin, tmax). Note that the integral is *not* 0
        after tmax: it integrates the spline from tmin to t clipped to
        [tmin, tmax], so it keeps the total charge of the pulse.
    >>> s = Spline_Current ([0, 1, 2, 3, 4], [0, 1, 2, 3, 4])
    >>> print (s.current (4.0), s.current (0.0))
    0.0 0.0
    >>> print (s.integral (-1.0))
    0.0
    >>> print (round (float (s.integral (10.0)), 6))
    8.0
    """

    def __init__ (self, t, i):
        t = np.asarray (t, dtype = float)
        i = np.asarray (i, dtype = float)
        if t.shape != i.shape or t.ndim != 1:
            raise ValueError ("Times and currents must have the same length")
        if len (t) < 4:
            raise ValueError ("Need at least 4 samples for a cubic spline")
        idx = np.argsort (t)
        t, i = t [idx], i [idx]
        self.tmin   = t [0]
        self.tmax   = t [-1]
        self.spline = InterpolatedUnivariateSpline (t, i, k = 3)
        self.dspline = self.spline.derivative ()
        self.ispline = self.spline.antiderivative ()
    # end def __init__

    def inside (self, t):
        return np.logical_and (self.tmin < t, t < self.tmax)
    # end def inside

    def current (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, self.inside (t), self.spline)
    # end def current

    def derivative (self, t):
        t = np.asarray (t, dtype = float)
        return masked (t, self.inside (t), self.dspline)
    # end def derivative

    def integral (self, t):
        t = np.clip (np.asarray (t, dtype = float), self.tmin, self.tmax)
        r = self.ispline (t) - self.ispline (self.tmin)
        return np.asarray (r) [()]
    # end def integral

# end class Spline_Current

__all__ = \
    [ 'Bi_Gaussian_Current'
    , 'Current_Waveform'
    , 'Function_Current'
    , 'Spline_Current'
    ]
