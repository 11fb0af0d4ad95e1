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
import numpy as np
from dipolerad.util            import measure_time, parse_floatlist
from dipolerad.current         import Bi_Gaussian_Current, Spline_Current
from dipolerad.dipole          import Dipole, Transmission_Line, mtle
from dipolerad.fieldcomponents import Field_Components

# Constants
epsilon_0 = 8.8541878128e-12
c_0       = 2.99792458e8

def directional_mats (dipole, robs):
    """ Matrices that give the electrostatic, induction and radiation
        part of the electric field at robs generated by the dipole when
        multiplied with the length vector of the dipole.
        The distance to robs must be > 0, this is not checked.
    """
    r    = np.asarray (robs, dtype = float) - dipole.r
    rabs = np.linalg.norm (r)
    n    = r / rabs
    # nn [i, j] = n [i] * n [j]
    nn   = np.outer (n, n)
    i3   = np.identity (3)
    f    = 4 * np.pi * epsilon_0
    return \
        ( (3 * nn - i3) / (f * rabs ** 3)
        , (3 * nn - i3) / (f * rabs ** 2 * c_0)
        , (nn - i3)     / (f * rabs * c_0 ** 2)
        )
# end def directional_mats

def prop_time (dipole, robs):
    """ Propagation time from the dipole to robs """
    return np.linalg.norm (dipole.r - np.asarray (robs, dtype = float)) / c_0
# end def prop_time

class Propagator:
    """ Time-independent part of the field of one dipole at one
        observation point: the direction (and magnitude) of the three
        field parts and the propagation delay dt.
    >>> d = Dipole ([0, 0, 0], [0, 0, 1], 1, 0, None)
    >>> p = Propagator (d, [0, 0, c_0])
    >>> print (p.dt)
    1.0
    >>> bool (np.all (p.v.rad == 0))
    True
    """

    def __init__ (self, dipole, robs):
        mats    = directional_mats (dipole, robs)
        self.v  = Field_Components (*(m @ dipole.l for m in mats))
        self.dt = prop_time (dipole, robs)
    # end def __init__

# end class Propagator

def is_line (tl):
    """ A single transmission line may also be a sequence of dipoles """
    if isinstance (tl, Transmission_Line):
        return True
    return all (isinstance (d, Dipole) for d in tl)
# end def is_line

class Field_Engine:
    """ Superposition of the fields of all dipoles of one or several
        transmission lines at an observation point.
        If t is set, the time for the field computation is printed.
    """

    def __init__ (self, t = False):
        self.do_timing = t
    # end def __init__

    def remote_field (self, dipole, prop, t):
        """ Field of dipole at time t (scalar or array) using the
            geometry in prop. The current is evaluated at the retarded
            time, so nothing arrives before tau + dt.
        """
        tr = np.asarray (t, dtype = float) - dipole.tau - prop.dt
        p  = dipole.pulse
        w  = dipole.w
        return Field_Components \
            ( np.multiply.outer (w * p.integral   (tr), prop.v.stat)
            , np.multiply.outer (w * p.current    (tr), prop.v.ind)
            , np.multiply.outer (w * p.derivative (tr), prop.v.rad)
            )
    # end def remote_field

    def fields (self, tl, robs, t, weights = None):
        """ Fields of transmission line tl (or a sequence of lines) at
            observation point robs for the times t. Returns a buffer
            with one Field_Components per time.
        """
        t = np.asarray (t, dtype = float)
        e = Field_Components.zero (len (t))
        return self.fields_into (e, tl, robs, t, weights)
    # end def fields

    @measure_time
    def fields_into (self, e, tl, robs, t, weights = None, props = None):
        """ Add the fields to the pre-allocated buffer e.
            Optionally weights multiplies the field of the dipole with
            index j by weights [j]. If given, props is a list with one
            slot per dipole that is filled with the Propagator
            instances. When tl is a sequence of lines, all lines are
            added in order, weights and props are not supported then.
        """
        robs = np.asarray (robs, dtype = float)
        t    = np.asarray (t, dtype = float)
        if t.ndim != 1:
            raise ValueError ("Times must be a one-dimensional sequence")
        if len (e) != len (t):
            raise ValueError ("Buffer must have one entry per time")
        if is_line (tl):
            self.line_fields_into (e, tl, robs, t, weights, props)
        else:
            if weights is not None or props is not None:
                raise ValueError \
                    ("weights and props are supported for a single line only")
            for line in tl:
                self.line_fields_into (e, line, robs, t)
        return e
    # end def fields_into

    def line_fields_into (self, e, tl, robs, t, weights = None, props = None):
        if props is None:
            props = [Propagator (d, robs) for d in tl]
        else:
            if len (props) != len (tl):
                raise ValueError \
                    ("props must have the same size as the transmission line")
            for j, d in enumerate (tl):
                props [j] = Propagator (d, robs)
        for j, (d, p) in enumerate (zip (tl, props)):
            f = None if weights is None else weights [j]
            e.accumulate (self.remote_field (d, p, t), f)
    # end def line_fields_into

# end class Field_Engine

default_engine = Field_Engine ()

def remote_field (dipole, prop, t):
    return default_engine.remote_field (dipole, prop, t)
# end def remote_field

def fields (tl, robs, t, weights = None):
    return default_engine.fields (tl, robs, t, weights)
# end def fields

def fields_into (e, tl, robs, t, weights = None, props = None):
    return default_engine.fields_into (e, tl, robs, t, weights, props)
# end def fields_into

def fields_as_table (t, e):
    """ One line per time: time, then the static, induction, radiation
        and total field, each as x, y, z.
    """
    r = ['# t ' + ' '.join
        ( '%s_%s' % (p, x)
          for p in ('stat', 'ind', 'rad', 'total')
          for x in 'xyz'
        )]
    for tm, f in zip (t, e):
        v = np.concatenate ((f.stat, f.ind, f.rad, f.total ()))
        r.append (' '.join ('% .6e' % x for x in (tm,) + tuple (v)))
    return '\n'.join (r)
# end def fields_as_table

def main (argv = sys.argv [1:], f_err = sys.stderr):
    """ Compute the field of a lightning channel at an observation point
        from the command-line
    """
    from argparse import ArgumentParser
    cmd = ArgumentParser ()
    cmd.add_argument \
        ( '--attenuation-length', '--lambda'
        , type    = float
        , default = 2000.0
        , help    = 'Attenuation length of the current in m, "inf" for'
                    ' no attenuation, default=%(default)s'
        )
    cmd.add_argument \
        ( '--bigaussian'
        , help    = 'Bi-gaussian current pulse: amplitude I0 in A, time'
                    ' scale of decaying term tau1 and rising term tau2'
                    ' in s, default=%(default)s'
        , default = '10e3,50e-6,2e-6'
        )
    cmd.add_argument \
        ( '--channel'
        , help    = 'Injection point and end point of the channel'
                    ' x0,y0,z0,x1,y1,z1 in m, default=%(default)s'
        , default = '0,0,0,0,0,7500'
        )
    cmd.add_argument \
        ( '--current-file'
        , help    = 'File with two columns time (s) and current (A),'
                    ' interpolated with a spline, overrides --bigaussian'
        )
    cmd.add_argument \
        ( '--mirror'
        , help    = 'Add image of channel for perfectly conducting ground'
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( '--observer'
        , help    = 'Observation point x,y,z in m, default=%(default)s'
        , default = '5000,0,0'
        )
    cmd.add_argument \
        ( '-n', '--segments'
        , type    = int
        , default = 100
        , help    = 'Number of dipoles in the channel, default=%(default)s'
        )
    cmd.add_argument \
        ( '--t0'
        , type    = float
        , default = 0.0
        , help    = 'Extra delay of the channel in s, default=%(default)s'
        )
    cmd.add_argument \
        ( '--time'
        , help    = 'Observation times start,increment,number'
                    ' default=%(default)s'
        , default = '0,5e-7,200'
        )
    cmd.add_argument \
        ( '-t', '--timing'
        , help    = 'Print timing information to stderr'
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( '-v', '--velocity'
        , type    = float
        , default = 1.5e8
        , help    = 'Propagation speed of the current pulse in m/s'
                    ' default=%(default)s'
        )
    cmd.add_argument \
        ( '--w0'
        , type    = float
        , default = 1.0
        , help    = 'Extra attenuation of the channel, default=%(default)s'
        )
    args = cmd.parse_args (argv)
    try:
        channel  = parse_floatlist (args.channel, 6)
        robs     = parse_floatlist (args.observer)
        tm       = args.time.split (',')
        if len (tm) != 3:
            raise ValueError ("Need three comma-separated values for time")
        t = float (tm [0]) + float (tm [1]) * np.arange (int (tm [2]))
        if args.current_file:
            ti, ii = np.loadtxt (args.current_file, unpack = True)
            pulse  = Spline_Current (ti, ii)
        else:
            pulse  = Bi_Gaussian_Current \
                (*parse_floatlist (args.bigaussian))
        tl = mtle \
            ( pulse, channel [:3], channel [3:]
            , args.velocity, args.attenuation_length, args.segments
            , mirror = args.mirror, w0 = args.w0, t0 = args.t0
            )
    except (TypeError, ValueError, OSError) as err:
        print ("Invalid config: %s" % err, file = f_err)
        return 23
    engine = Field_Engine (t = args.timing)
    e = engine.fields (tl, robs, t)
    print (fields_as_table (t, e))
# end def main

if __name__ == '__main__':
    main () # pragma: no cover

__all__ = \
    [ 'Field_Engine'
    , 'Propagator'
    , 'c_0'
    , 'directional_mats'
    , 'epsilon_0'
    , 'fields'
    , 'fields_into'
    , 'prop_time'
    , 'remote_field'
    ]
