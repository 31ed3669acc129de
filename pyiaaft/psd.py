"""
Periodogram estimation and coarse-graining, used to monitor the convergence
of the IAAFT iterations.
"""

from collections import namedtuple
from functools import lru_cache
import warnings

import numpy as np
from scipy import fft
from scipy.signal import periodogram, welch
from scipy.signal.windows import dpss

PSD = namedtuple('PSD', 'freq psd')
"""Aggregates power spectral density information

Attributes
----------
freq : ndarray
    Normalized frequency support of the psd values, within [0, 0.5]
psd : ndarray
    Power density associated matching the frequencies in ``freq``
"""


def periodogram_estimation(signal):
    """
    Wrapper for :obj:`scipy.signal.periodogram`

    Single (rectangular) taper, one-sided power spectral density, with unit
    sampling frequency and no detrending.

    Parameters
    ----------
    signal : 1D-array_like
        Time series of sampled values

    Returns
    -------
    psd : PSD
    """

    freq, psd = periodogram(signal, fs=1.0, window='boxcar', detrend=False,
                            return_onesided=True, scaling='density')

    return PSD(freq=freq, psd=psd)


@lru_cache(maxsize=16)
def _dpss_tapers(n, nw, n_tapers):
    """
    Unit-energy DPSS tapers for a signal of length ``n``.
    """

    tapers = dpss(n, nw, Kmax=n_tapers)
    tapers.flags.writeable = False
    return tapers


def multitaper_estimation(signal, nw=4, n_tapers=None):
    """
    Multitaper power spectral density estimate, using discrete prolate
    spheroidal sequences as tapers.

    Parameters
    ----------
    signal : 1D-array_like
        Time series of sampled values
    nw : float
        Time-half-bandwidth product. Clipped to ``(n_samples - 1) / 2`` for
        short signals.
    n_tapers : int | None
        Number of tapers. Defaults to ``2 * nw - 1``.

    Returns
    -------
    psd : PSD
    """

    signal = np.asarray(signal, dtype=float)
    n = signal.shape[0]

    if nw >= n / 2:
        warnings.warn(
            f'nw = {nw} too large for a signal of length {n}, using '
            f'{(n - 1) / 2} instead')
        nw = (n - 1) / 2

    if n_tapers is None:
        n_tapers = int(2 * nw) - 1

    n_tapers = min(max(n_tapers, 1), n)

    tapers = _dpss_tapers(n, nw, n_tapers)

    # Unit-energy tapers, so |X|^2 is a density for fs = 1
    power = np.abs(fft.rfft(tapers * signal[None, :], axis=-1)) ** 2
    psd = power.mean(axis=0)

    # compensating for negative frequencies
    if n % 2 == 0:
        psd[1:-1] *= 2
    else:
        psd[1:] *= 2

    return PSD(freq=fft.rfftfreq(n), psd=psd)


def welch_estimation(signal, n_fft=None, seg_size=None):
    """
    Wrapper for :obj:`scipy.signal.welch`

    Parameters
    ----------
    signal : 1D-array_like
        Time series of sampled values

    n_fft : int | None
        Length of the FFT desired.
        If `seg_size` is greater, ``n_fft = seg_size``.

    seg_size : int | None
        Length of Welch segments.
        Defaults to None, which sets it to ``min(256, n_samples)``

    Returns
    -------
    psd : PSD
    """

    # Input argument sanitizing

    if seg_size is None:
        seg_size = min(256, len(signal))

    if n_fft is None or n_fft < seg_size:
        n_fft = seg_size

    freq, psd = welch(signal,
                      fs=1.0,
                      window='hamming',
                      nperseg=seg_size,
                      noverlap=seg_size // 2,
                      nfft=n_fft,
                      detrend=False,
                      return_onesided=True,
                      scaling='density',
                      average='mean')

    return PSD(freq=freq, psd=psd)


ESTIMATORS = {
    'periodogram': periodogram_estimation,
    'multitaper': multitaper_estimation,
    'welch': welch_estimation,
}


def get_estimator(name):
    """
    Get the PSD estimation function registered under ``name``.

    Parameters
    ----------
    name : str
        One of ``'periodogram'``, ``'multitaper'`` or ``'welch'``.
    """

    if name not in ESTIMATORS:
        raise ValueError(
            f'Unknown estimator {name!r}, expected one of '
            f'{sorted(ESTIMATORS)}')

    return ESTIMATORS[name]


def bin_psd(psd, n_windows):
    """
    Coarse-grain a PSD onto ``n_windows`` equal-width frequency windows
    spanning 0 to the Nyquist frequency.

    The power is averaged within each window. Windows containing no frequency
    of ``psd`` (when ``n_windows`` exceeds the frequency resolution) take the
    value linearly interpolated at their center.

    Parameters
    ----------
    psd : PSD
        Estimated power spectral density.
    n_windows : int
        Number of frequency windows.

    Returns
    -------
    psd : PSD
        Binned PSD, ``freq`` holding the window centers.
    """

    edges = np.linspace(0, 0.5, n_windows + 1)
    centers = (edges[:-1] + edges[1:]) / 2

    # The Nyquist frequency belongs to the last window
    idx = np.clip(np.digitize(psd.freq, edges) - 1, 0, n_windows - 1)
    counts = np.bincount(idx, minlength=n_windows)
    sums = np.bincount(idx, weights=psd.psd, minlength=n_windows)

    binned = np.interp(centers, psd.freq, psd.psd)
    filled = counts > 0
    binned[filled] = sums[filled] / counts[filled]

    return PSD(freq=centers, psd=binned)


def binned_deviation(reference, other):
    """
    Normalized sum of squared deviations between two binned PSDs.

    .. math::

        \\frac{\\sum_f (P_{ref}(f) - P(f))^2}{\\sum_f P_{ref}(f)^2}
    """

    return (np.sum((reference.psd - other.psd) ** 2)
            / np.sum(reference.psd ** 2))
