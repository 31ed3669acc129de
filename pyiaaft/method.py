"""
Configuration of the IAAFT surrogate method.
"""

from dataclasses import dataclass
from numbers import Integral, Real

from .fourier import TRANSFORMS
from .psd import ESTIMATORS


@dataclass(frozen=True, kw_only=True)
class IAAFT:
    r"""
    Iteratively adjusted amplitude-adjusted Fourier transform surrogate
    method [1]_.

    IAAFT surrogates share the amplitude distribution of the original data
    exactly, and approximately its periodogram. Spectral amplitudes and rank
    order are adjusted alternately, for at most ``n_maxiter`` iterations.
    During the adjustment, the periodograms of the original signal and of the
    surrogate are coarse-grained onto ``n_windows`` frequencies, and the
    iterations stop once the relative deviation between them changes by less
    than ``tol`` from one iteration to the next.

    Attributes
    ----------
    n_maxiter : int
        Maximum number of iterations.
    tol : float
        Tolerance on the change in periodogram deviation between successive
        iterations.
    n_windows : int
        Number of frequency windows used to coarse-grain the periodograms.
    transform : str
        Fourier transform provider, ``'rfft'`` (one-sided) or ``'fft'``
        (full complex spectrum).
    estimator : str
        Periodogram estimator used in the convergence check: ``'periodogram'``,
        ``'multitaper'`` or ``'welch'``.
    keep_iterates : bool
        If True, generating returns the surrogates obtained at every
        iteration instead of only the final one.

    References
    ----------
    .. [1] T. Schreiber, A. Schmitz (1996). Improved Surrogate Data for
        Nonlinearity Tests. Phys. Rev. Lett. 77 (4): 635-638.
        doi:10.1103/PhysRevLett.77.635
    """
    n_maxiter: int = 100
    tol: float = 1e-6
    n_windows: int = 75
    transform: str = 'rfft'
    estimator: str = 'periodogram'
    keep_iterates: bool = False

    def __post_init__(self):

        for name in ['n_maxiter', 'n_windows']:
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, Integral)
                    or value < 1):
                raise ValueError(
                    f'{name} should be a positive integer, got {value!r}')

        if (isinstance(self.tol, bool) or not isinstance(self.tol, Real)
                or not self.tol > 0):
            raise ValueError(
                f'tol should be a positive number, got {self.tol!r}')

        if self.transform not in TRANSFORMS:
            raise ValueError(
                f'Unknown transform {self.transform!r}, expected one of '
                f'{sorted(TRANSFORMS)}')

        if self.estimator not in ESTIMATORS:
            raise ValueError(
                f'Unknown estimator {self.estimator!r}, expected one of '
                f'{sorted(ESTIMATORS)}')
