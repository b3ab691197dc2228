#
# Seeded 2D simplex noise, vectorized with numpy.
#
# Based on example code by Stefan Gustavson (stegu@itn.liu.se), placed in
# the public domain by its original author.
#
import numpy


grad3 = numpy.array([(1,1,0),(-1,1,0),(1,-1,0),(-1,-1,0),
                     (1,0,1),(-1,0,1),(1,0,-1),(-1,0,-1),
                     (0,1,1),(0,-1,1),(0,1,-1),(0,-1,-1)], dtype=numpy.float64)

#Skewing and unskewing factors for 2 dimensions
F2 = 0.5*(3.0**0.5-1.0)
G2 = (3.0-3.0**0.5)/6.0


class SimplexNoise(object):
    """2D simplex noise with its own permutation table.

    The table comes from a private RandomState, so two instances built with
    the same seed always agree and nothing touches numpy's global RNG.
    """

    def __init__(self, seed=0):
        self.seed = seed
        rng = numpy.random.RandomState(seed % (2**32))
        p = rng.permutation(256)
        # To remove the need for index wrapping, double the permutation table length
        self.perm = numpy.concatenate([p, p]).astype(numpy.int64)
        self.perm_mod12 = self.perm % 12

    def _corner(self, gi, x, y):
        t = 0.5 - x*x - y*y
        inside = t > 0
        t = numpy.where(inside, t, 0.0)
        g = grad3[gi]
        return inside * t*t*t*t * (g[..., 0]*x + g[..., 1]*y)

    def noise(self, xin, yin):
        """ Sample the noise field at (`xin`, `yin`).

        Accepts scalars or arrays of matching shape; returns a float for
        scalar input, otherwise an array. Values lie in roughly [-1, 1].

        """
        xin = numpy.asarray(xin, dtype=numpy.float64)
        yin = numpy.asarray(yin, dtype=numpy.float64)
        scalar = xin.ndim == 0 and yin.ndim == 0
        xin, yin = numpy.broadcast_arrays(xin, yin)

        # Skew the input space to determine which simplex cell we're in
        s = (xin+yin)*F2
        i = numpy.floor(xin+s).astype(numpy.int64)
        j = numpy.floor(yin+s).astype(numpy.int64)
        t = (i+j)*G2
        x0 = xin-(i-t) # The x,y distances from the cell origin
        y0 = yin-(j-t)
        # Lower triangle, XY order: (0,0)->(1,0)->(1,1); otherwise upper triangle, YX order.
        i1 = (x0 > y0).astype(numpy.int64)
        j1 = 1 - i1
        x1 = x0 - i1 + G2 # Offsets for middle corner in (x,y) unskewed coords
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2 # Offsets for last corner in (x,y) unskewed coords
        y2 = y0 - 1.0 + 2.0 * G2

        # Work out the hashed gradient indices of the three simplex corners
        perm = self.perm
        ii = i & 255
        jj = j & 255
        gi0 = self.perm_mod12[ii+perm[jj]]
        gi1 = self.perm_mod12[ii+i1+perm[jj+j1]]
        gi2 = self.perm_mod12[ii+1+perm[jj+1]]

        n = self._corner(gi0, x0, y0) + self._corner(gi1, x1, y1) + self._corner(gi2, x2, y2)
        # The result is scaled to return values in the interval [-1,1].
        n = 70.0 * n
        if scalar:
            return float(n)
        return n
