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

class Field_Components:
    """ Electric field split into electrostatic (stat), induction (ind)
        and radiation (rad) part. Each part is a 3-vector. A buffer of
        fields for several time samples stores each part as an array
        of shape (n, 3), indexing it yields the field of one sample.
    >>> a = Field_Components ([1, 0, 0], [0, 2, 0], [0, 0, 3])
    >>> print ((a + a).total ())
    [2. 4. 6.]
    >>> print ((2 * a).total (), (a * 0.5).rad)
    [2. 4. 6.] [0.  0.  1.5]
    >>> e = Field_Components.zero (4)
    >>> len (e), e.total ().shape
    (4, (4, 3))
    >>> print (e [1].total ())
    [0. 0. 0.]
    """

    def __init__ (self, stat, ind, rad):
        self.stat = np.asarray (stat, dtype = float)
        self.ind  = np.asarray (ind,  dtype = float)
        self.rad  = np.asarray (rad,  dtype = float)
        assert self.stat.shape == self.ind.shape == self.rad.shape
        assert self.stat.shape [-1] == 3
    # end def __init__

    @classmethod
    def zero (cls, n = None):
        """ Zero field, if n is given a buffer for n samples """
        shape = (3,) if n is None else (n, 3)
        return cls (np.zeros (shape), np.zeros (shape), np.zeros (shape))
    # end def zero

    def __add__ (self, other):
        return self.__class__ \
            (self.stat + other.stat, self.ind + other.ind, self.rad + other.rad)
    # end def __add__

    def __mul__ (self, k):
        return self.__class__ (self.stat * k, self.ind * k, self.rad * k)
    # end def __mul__
    __rmul__ = __mul__

    def __len__ (self):
        if self.stat.ndim < 2:
            raise TypeError ("Single field has no length")
        return self.stat.shape [0]
    # end def __len__

    def __getitem__ (self, idx):
        return self.__class__ (self.stat [idx], self.ind [idx], self.rad [idx])
    # end def __getitem__

    def __iter__ (self):
        for idx in range (len (self)):
            yield self [idx]
    # end def __iter__

    def __repr__ (self):
        return 'Field_Components (stat=%s, ind=%s, rad=%s)' \
            % (self.stat, self.ind, self.rad)
    # end def __repr__

    @property
    def shape (self):
        return self.stat.shape
    # end def shape

    def accumulate (self, other, weight = None):
        """ Add other (optionally multiplied by weight) in place.
            This is used to fill a buffer allocated by the caller.
        """
        for name in ('stat', 'ind', 'rad'):
            v = getattr (other, name)
            if weight is not None:
                v = v * weight
            getattr (self, name) [...] += v
    # end def accumulate

    def allclose (self, other, **kw):
        return \
            (   np.allclose (self.stat, other.stat, **kw)
            and np.allclose (self.ind,  other.ind,  **kw)
            and np.allclose (self.rad,  other.rad,  **kw)
            )
    # end def allclose

    def total (self):
        """ Sum of the three parts """
        return self.stat + self.ind + self.rad
    # end def total

# end class Field_Components

__all__ = ['Field_Components']
