"""
Shared helpers: input checking, random state handling and result containers.
"""

from collections import namedtuple

import numpy as np


IAAFTIterate = namedtuple('IAAFTIterate', 'surrogate diff n_iter')
"""Outcome of a single refinement iteration

Attributes
----------
surrogate : ndarray, shape (n_samples,)
    Rank-mapped candidate surrogate, a permutation of the original values.
diff : float
    Normalized squared deviation between the binned periodogram of
    ``surrogate`` and the reference binned periodogram.
n_iter : int
    Index of the iteration, starting at 1. It is 0 for the single iterate
    produced from a constant signal.
"""


class InvalidInputError(ValueError):
    """
    Raised when a signal cannot be used to generate surrogates.
    """


def check_signal(signal):
    """
    Validate a signal and return it as a 1D float array.

    Parameters
    ----------
    signal : array_like, shape (n_samples,)
        Time series of sampled values.

    Returns
    -------
    signal : ndarray, shape (n_samples,)
        Copy of the input, as float64.

    Raises
    ------
    InvalidInputError
        If the signal is not one-dimensional, has fewer than 2 samples, or
        contains non-finite values.
    """

    try:
        signal = np.array(signal, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidInputError(
            'Signal must be a sequence of real numbers') from err

    if signal.ndim != 1:
        raise InvalidInputError(
            f'Expected a 1D signal, got an array of shape {signal.shape}')

    if signal.shape[0] < 2:
        raise InvalidInputError(
            f'Signal must have at least 2 samples, got {signal.shape[0]}')

    if not np.isfinite(signal).all():
        raise InvalidInputError('Signal must not contain NaN or inf values')

    return signal


def check_random_state(rng):
    """
    Turn ``rng`` into a :class:`numpy.random.Generator`.

    Parameters
    ----------
    rng : None | int | SeedSequence | Generator
        Existing generators are returned as is; anything else seeds a new
        generator.
    """

    if isinstance(rng, np.random.Generator):
        return rng

    return np.random.default_rng(rng)


def freeze(array):
    """
    Return a read-only copy of ``array``.
    """

    array = np.array(array, copy=True)
    array.flags.writeable = False
    return array
