import pytest

import numpy as np


@pytest.fixture(scope="session")
def sine():

    t = np.arange(512)
    return np.sin(2 * np.pi * 8 * t / 512)


@pytest.fixture(scope="session")
def nonlinear_signal():
    """
    Squared AR(1) process: linear correlations and a skewed distribution.
    """

    rng = np.random.default_rng(1234)
    noise = rng.standard_normal(1000)

    x = np.zeros_like(noise)
    for i in range(1, x.shape[0]):
        x[i] = 0.9 * x[i-1] + noise[i]

    return x ** 2


@pytest.fixture(scope="session")
def short_signal():
    return np.array([1.0, 5.0, 2.0, 8.0, 3.0, 7.0, 4.0, 6.0])
