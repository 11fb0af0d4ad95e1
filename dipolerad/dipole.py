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

class Dipole:
    """ Dipole element of a transmission line.
        It has a location r (the midpoint), a length vector l, an
        attenuation factor w and a delay time tau. The pulse is the
        current waveform for tau=0 and w=1, it is shared by all
        dipoles of a line and never copied.
    >>> d = Dipole ([0, 0, 5], [1, 2, 3], 0.5, 1e-6, None)
    >>> d
    Dipole [0. 0. 5.] l=[1. 2. 3.] w=0.5 tau=1e-06
    >>> image (d, 1)
    Dipole [ 0.  0. -3.] l=[-1. -2.  3.] w=0.5 tau=1e-06
    >>> image (image (d, 1), 1) == d
    True
    """

    def __init__ (self, r, l, w, tau, pulse):
        self._r     = np.array (r, dtype = float)
        self._l     = np.array (l, dtype = float)
        self._w     = float (w)
        self._tau   = float (tau)
        self._pulse = pulse
        assert self._r.shape == self._l.shape == (3,)
        self._r.flags.writeable = False
        self._l.flags.writeable = False
    # end def __init__

    @property
    def r (self):
        return self._r
    # end def r

    @property
    def l (self):
        return self._l
    # end def l

    @property
    def w (self):
        return self._w
    # end def w

    @property
    def tau (self):
        return self._tau
    # end def tau

    @property
    def pulse (self):
        return self._pulse
    # end def pulse

    def __eq__ (self, other):
        if not isinstance (other, Dipole):
            return NotImplemented
        return \
            (   np.array_equal (self.r, other.r)
            and np.array_equal (self.l, other.l)
            and self.w     == other.w
            and self.tau   == other.tau
            and self.pulse is other.pulse
            )
    # end def __eq__

    def __repr__ (self):
        return 'Dipole %s l=%s w=%g tau=%g' % (self.r, self.l, self.w, self.tau)
    # end def __repr__

    def image (self, z = 0):
        """ Mirror image at the horizontal plane at height z, this
            models a perfectly conducting ground.
            Mirroring twice at the same z gives back the dipole, the
            height is computed as 2 * z - r_z so for arbitrary z this
            holds only up to floating point rounding.
        """
        r = np.array ([self.r [0], self.r [1], 2 * z - self.r [2]])
        l = np.array ([-self.l [0], -self.l [1], self.l [2]])
        return self.__class__ (r, l, self.w, self.tau, self.pulse)
    # end def image

# end class Dipole

class Transmission_Line:
    """ Ordered, immutable sequence of dipoles """

    def __init__ (self, dipoles):
        self._dipoles = tuple (dipoles)
    # end def __init__

    @property
    def dipoles (self):
        return self._dipoles
    # end def dipoles

    def __add__ (self, other):
        return self.__class__ (self.dipoles + tuple (other))
    # end def __add__

    def __eq__ (self, other):
        if not isinstance (other, Transmission_Line):
            return NotImplemented
        return self.dipoles == other.dipoles
    # end def __eq__

    def __getitem__ (self, idx):
        if isinstance (idx, slice):
            return self.__class__ (self.dipoles [idx])
        return self.dipoles [idx]
    # end def __getitem__

    def __iter__ (self):
        for d in self.dipoles:
            yield d
    # end def __iter__

    def __len__ (self):
        return len (self.dipoles)
    # end def __len__

    def __repr__ (self):
        return 'Transmission_Line (%d dipoles)' % len (self)
    # end def __repr__

    def image (self, z = 0):
        return self.__class__ (d.image (z) for d in self.dipoles)
    # end def image

# end class Transmission_Line

def image (obj, z = 0):
    """ Mirror image of a dipole or of a whole transmission line (which
        may also be given as a sequence of dipoles) at height z.
    """
    if isinstance (obj, (Dipole, Transmission_Line)):
        return obj.image (z)
    return Transmission_Line (d.image (z) for d in obj)
# end def image

def mtle (pulse, r0, r1, v, lam, n, mirror = False, w0 = 1.0, t0 = 0.0):
    """ Build an MTLE transmission line (modified transmission line
        with exponential decay) from n dipoles.
        pulse is the current pulse at the injection point, r0 and r1 are
        the injection and the end point of the line, v is the
        propagation speed of the current pulse and lam the attenuation
        length (may be infinite). If mirror is set we append the image
        of the line with z=0 as the surface of a perfect conductor.
        To join several lines we allow an extra constant attenuation w0
        and an extra delay t0.
    >>> r1 = np.array ([0, 0, 100.0])
    >>> tl = mtle (None, np.zeros (3), r1, 1e8, np.inf, 4)
    >>> len (tl), len (mtle (None, np.zeros (3), r1, 1e8, 2e3, 4, True))
    (4, 8)
    >>> print (tl [1].tau, tl [1].w)
    2.5e-07 1.0
    """
    if n < 1:
        raise ValueError ("Need at least one dipole, got n=%s" % n)
    if v <= 0:
        raise ValueError ("Propagation speed must be > 0")
    if lam <= 0:
        raise ValueError ("Attenuation length must be > 0")
    r0 = np.asarray (r0, dtype = float)
    r1 = np.asarray (r1, dtype = float)
    l  = np.linalg.norm (r1 - r0)
    # Vector from one dipole to the next
    d  = (r1 - r0) / n
    dipoles = []
    for i in range (n):
        # Midpoint of the dipole
        r   = r0 + (i + 0.5) * d
        # Distance to the injection point
        s   = i * l / n
        tau = s / v + t0
        w   = w0 * np.exp (-s / lam)
        dipoles.append (Dipole (r, d, w, tau, pulse))
    tl = Transmission_Line (dipoles)
    if mirror:
        tl = tl + tl.image ()
    return tl
# end def mtle

__all__ = ['Dipole', 'Transmission_Line', 'image', 'mtle']
