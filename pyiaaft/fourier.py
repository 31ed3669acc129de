"""
Fourier transform providers bound to a fixed signal length.
"""

from dataclasses import dataclass

import numpy as np
from scipy import fft


@dataclass(frozen=True)
class RealFourier:
    """
    Real-input transform, using the one-sided spectrum.

    Attributes
    ----------
    n : int
        Length of the signals the transform is bound to.
    workers : int | None
        Number of workers passed on to :mod:`scipy.fft`.
    """
    n: int
    workers: int | None = None

    @property
    def n_freq(self):
        """Number of coefficients in the spectrum."""
        return self.n // 2 + 1

    def _check_length(self, x):

        if np.shape(x)[-1] != self.n:
            raise ValueError(
                f'Transform is bound to length {self.n}, got a sequence of '
                f'length {np.shape(x)[-1]}')

    def forward(self, x):
        self._check_length(x)
        return fft.rfft(x, n=self.n, workers=self.workers)

    def inverse(self, spectrum):
        return fft.irfft(spectrum, n=self.n, workers=self.workers)


@dataclass(frozen=True)
class ComplexFourier(RealFourier):
    """
    Full complex transform, keeping the redundant negative frequencies.
    """

    @property
    def n_freq(self):
        return self.n

    def forward(self, x):
        self._check_length(x)
        return fft.fft(x, n=self.n, workers=self.workers)

    def inverse(self, spectrum):
        return fft.ifft(spectrum, n=self.n, workers=self.workers).real


TRANSFORMS = {
    'rfft': RealFourier,
    'fft': ComplexFourier,
}


def get_transform(name, n, workers=None):
    """
    Build the transform provider registered under ``name``.

    Parameters
    ----------
    name : str
        One of ``'rfft'`` or ``'fft'``.
    n : int
        Signal length.
    workers : int | None
        Number of workers used by :mod:`scipy.fft`.
    """

    if name not in TRANSFORMS:
        raise ValueError(
            f'Unknown transform {name!r}, expected one of '
            f'{sorted(TRANSFORMS)}')

    return TRANSFORMS[name](n, workers)
