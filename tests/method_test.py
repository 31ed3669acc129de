import dataclasses

import pytest

from pyiaaft import IAAFT


def test_defaults():

    method = IAAFT()

    assert method.n_maxiter == 100
    assert method.tol == 1e-6
    assert method.n_windows == 75
    assert method.transform == 'rfft'
    assert method.estimator == 'periodogram'
    assert not method.keep_iterates


def test_frozen():

    method = IAAFT(n_maxiter=10)

    with pytest.raises(dataclasses.FrozenInstanceError):
        method.n_maxiter = 20


def test_keyword_only():

    with pytest.raises(TypeError):
        IAAFT(100, 1e-6, 75)  # pylint: disable=E1121


@pytest.mark.parametrize('kwargs', [
    {'n_maxiter': 0},
    {'n_maxiter': 2.5},
    {'n_maxiter': True},
    {'n_windows': -3},
    {'tol': 0},
    {'tol': -1e-3},
    {'tol': float('nan')},
    {'transform': 'dct'},
    {'estimator': 'lomb-scargle'},
])
def test_invalid_configuration(kwargs):

    with pytest.raises(ValueError):
        IAAFT(**kwargs)
