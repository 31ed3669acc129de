"""
Iteratively adjusted amplitude-adjusted Fourier transform (IAAFT) surrogates.

Generation happens in two phases: :func:`prepare` computes, once per signal,
everything that does not depend on the random draw, and :func:`generate` runs
the iterative refinement against that read-only context.
"""

from dataclasses import dataclass, field
from typing import Callable
import warnings

import numpy as np
from joblib import Parallel, delayed
from tqdm.auto import tqdm

from .fourier import RealFourier, get_transform
from .method import IAAFT
from .psd import PSD, get_estimator, bin_psd, binned_deviation
from .utils import IAAFTIterate, check_signal, check_random_state, freeze


@dataclass(frozen=True, kw_only=True)
class IAAFTContext:
    """
    Precomputed quantities shared by all the surrogates of a signal.

    .. note:: Should not be instantiated directly but instead created using
        the :func:`prepare` function.

    Attributes
    ----------
    method : IAAFT
        Method configuration.
    signal : ndarray, shape (n_samples,)
        Original signal.
    mean : float
        Mean of the original signal.
    amplitudes : ndarray
        Spectral amplitudes of the zero-mean original signal.
    sorted_signal : ndarray, shape (n_samples,)
        Original values sorted in ascending order.
    reference : PSD
        Coarse-grained periodogram of the zero-mean original signal.
    degenerate : bool
        Whether the signal is constant, in which case it has no spectral
        power to match.
    transform : RealFourier
        Fourier transform provider bound to ``n_samples``.
    estimator : Callable
        Periodogram estimator used in the convergence check.

    All arrays are read-only, so that a context can be shared between threads.
    """
    method: IAAFT
    signal: np.ndarray = field(repr=False)
    mean: float
    amplitudes: np.ndarray = field(repr=False)
    sorted_signal: np.ndarray = field(repr=False)
    reference: PSD = field(repr=False)
    degenerate: bool
    transform: RealFourier
    estimator: Callable = field(repr=False)

    @property
    def n_samples(self):
        return self.signal.shape[0]

    def binned_psd(self, x):
        """
        Coarse-grained periodogram of ``x`` after removing the original mean.
        """
        return bin_psd(self.estimator(x - self.mean), self.method.n_windows)


def prepare(signal, method=None, workers=None):
    """
    Precompute the quantities needed to draw IAAFT surrogates of ``signal``.

    Parameters
    ----------
    signal : array_like, shape (n_samples,)
        Time series of sampled values, finite and of length at least 2.
    method : IAAFT | None
        Method configuration. Defaults to ``IAAFT()``.
    workers : int | None
        Number of workers used by :mod:`scipy.fft`.

    Returns
    -------
    context : IAAFTContext

    Raises
    ------
    InvalidInputError
        If the signal is not a valid finite 1D time series.
    """

    signal = check_signal(signal)

    if method is None:
        method = IAAFT()

    transform = get_transform(method.transform, signal.shape[0], workers)
    estimator = get_estimator(method.estimator)

    mean = signal.mean()
    amplitudes = np.abs(transform.forward(signal - mean))

    reference = bin_psd(estimator(signal - mean), method.n_windows)

    degenerate = bool(np.ptp(signal) == 0 or np.sum(reference.psd ** 2) == 0)

    return IAAFTContext(
        method=method,
        signal=freeze(signal),
        mean=mean,
        amplitudes=freeze(amplitudes),
        sorted_signal=freeze(np.sort(signal)),
        reference=PSD(freq=freeze(reference.freq), psd=freeze(reference.psd)),
        degenerate=degenerate,
        transform=transform,
        estimator=estimator,
    )


def iterate(context, rng=None):
    """
    Iterate the IAAFT refinement of a single surrogate.

    Each call starts from a fresh random ordering of the original values, and
    owns all of its working arrays.

    Parameters
    ----------
    context : IAAFTContext
        Output of :func:`prepare`.
    rng : None | int | SeedSequence | Generator
        Source of randomness for the initial ordering.

    Yields
    ------
    iterate : IAAFTIterate
        Surrogate obtained at each iteration, along with the deviation of its
        coarse-grained periodogram from the original one. The last iterate
        yielded is the final surrogate.
    """

    rng = check_random_state(rng)
    method = context.method

    # Rank ordering: sort the original values along the ranks of Gaussian
    # noise, which randomizes the phases but not the amplitude distribution
    noise = rng.standard_normal(context.n_samples)
    ts_sorted = context.signal[np.argsort(noise)]

    if context.degenerate:
        warnings.warn(
            'Signal is constant, returning a permutation of its values '
            'without iterating')
        yield IAAFTIterate(surrogate=ts_sorted, diff=0.0, n_iter=0)
        return

    diff_prev = None

    for n_iter in range(1, method.n_maxiter + 1):

        # Keep the original spectral amplitudes, but the phases of the
        # current ordering
        phases = np.angle(context.transform.forward(ts_sorted))
        s = context.transform.inverse(
            context.amplitudes * np.exp(1j * phases))

        # Map the original values onto the ranks of the new series
        s[np.argsort(s, kind='stable')] = context.sorted_signal
        ts_sorted = s

        diff = binned_deviation(context.reference, context.binned_psd(s))

        yield IAAFTIterate(surrogate=s.copy(), diff=diff, n_iter=n_iter)

        if diff_prev is not None and abs(diff_prev - diff) < method.tol:
            return

        diff_prev = diff


def generate(context, rng=None, return_n_iter=False):
    """
    Draw an IAAFT surrogate from a precomputed context.

    Parameters
    ----------
    context : IAAFTContext
        Output of :func:`prepare`. It is not modified.
    rng : None | int | SeedSequence | Generator
        Source of randomness. Two calls with the same seed give the same
        surrogate.
    return_n_iter : bool
        Whether to also return the number of iterations performed.

    Returns
    -------
    surrogate : ndarray, shape (n_samples,) | (n_iter, n_samples)
        Permutation of the original values. If ``context.method`` has
        ``keep_iterates=True``, all the iterates are returned instead, the
        last row being the final surrogate.
    n_iter : int
        Number of iterations performed. Equal to ``n_maxiter`` if the
        tolerance was not met. Only returned if ``return_n_iter`` is True.
    """

    if context.method.keep_iterates:

        iterates = list(iterate(context, rng))
        surrogate = np.stack([it.surrogate for it in iterates])
        n_iter = iterates[-1].n_iter

    else:

        for last in iterate(context, rng):
            pass

        surrogate, n_iter = last.surrogate, last.n_iter

    if return_n_iter:
        return surrogate, n_iter

    return surrogate


def iaaft(signal, n_maxiter=100, tol=1e-6, n_windows=75, rng=None,
          **kwargs):
    """
    Generate a single IAAFT surrogate of ``signal``.

    For repeated draws from the same signal, use :func:`surrogenerator`
    instead, which only precomputes once.

    Parameters
    ----------
    signal : array_like, shape (n_samples,)
        Time series of sampled values.
    n_maxiter : int
        Maximum number of iterations.
    tol : float
        Tolerance on the change in periodogram deviation between successive
        iterations.
    n_windows : int
        Number of frequency windows used to coarse-grain the periodograms.
    rng : None | int | SeedSequence | Generator
        Source of randomness.
    **kwargs
        Other :class:`IAAFT` parameters.

    Returns
    -------
    surrogate : ndarray
    """

    method = IAAFT(n_maxiter=n_maxiter, tol=tol, n_windows=n_windows,
                   **kwargs)

    return generate(prepare(signal, method), rng)


@dataclass(frozen=True)
class SurrogateGenerator:
    """
    Draws IAAFT surrogates of a signal, reusing a single precomputed context.

    Attributes
    ----------
    context : IAAFTContext
    """
    context: IAAFTContext

    @property
    def method(self):
        return self.context.method

    def __call__(self, rng=None):
        return generate(self.context, rng)

    def draw(self, n_surrogates, rng=None, n_jobs=1, progress=False):
        """
        Draw several independent surrogates.

        Parameters
        ----------
        n_surrogates : int
            Number of surrogates.
        rng : None | int | SeedSequence | Generator
            Source of randomness, from which one child generator per
            surrogate is spawned. The output for a given seed does not depend
            on ``n_jobs``.
        n_jobs : int
            Number of threads joblib will use. The context is shared between
            threads.
        progress : bool
            Whether to display a progress bar.

        Returns
        -------
        surrogates : ndarray, shape (n_surrogates, n_samples)
        """

        if n_surrogates < 1:
            raise ValueError(
                f'n_surrogates should be at least 1, got {n_surrogates}')

        if self.method.keep_iterates:
            raise ValueError(
                'Drawing several surrogates is not supported with '
                'keep_iterates=True')

        rngs = check_random_state(rng).spawn(n_surrogates)

        surrogates = Parallel(n_jobs=n_jobs, backend='threading')(
            delayed(generate)(self.context, child)
            for child in tqdm(rngs, desc='IAAFT surrogates',
                              disable=not progress)
        )

        return np.stack(surrogates)


def surrogenerator(signal, method=None, workers=None):
    """
    Create a surrogate generator for ``signal``.

    Parameters
    ----------
    signal : array_like, shape (n_samples,)
        Time series of sampled values.
    method : IAAFT | None
        Method configuration. Defaults to ``IAAFT()``.
    workers : int | None
        Number of workers used by :mod:`scipy.fft`.

    Returns
    -------
    generator : SurrogateGenerator

    Examples
    --------
    >>> sg = surrogenerator(x, IAAFT(n_maxiter=200))
    >>> s1, s2 = sg(), sg()
    >>> S = sg.draw(100, rng=42)
    """

    return SurrogateGenerator(prepare(signal, method, workers))
