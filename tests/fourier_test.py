import pytest

import numpy as np

from pyiaaft.fourier import RealFourier, ComplexFourier, get_transform


@pytest.mark.parametrize('name', ['rfft', 'fft'])
def test_round_trip(name):

    rng = np.random.default_rng(0)

    for n in [2, 7, 8, 101, 256]:

        x = rng.standard_normal(n)
        transform = get_transform(name, n)

        spectrum = transform.forward(x)
        assert spectrum.shape == (transform.n_freq,)
        assert np.allclose(transform.inverse(spectrum), x)


def test_spectrum_size():

    assert RealFourier(8).n_freq == 5
    assert RealFourier(9).n_freq == 5
    assert ComplexFourier(8).n_freq == 8


def test_amplitudes_match():

    x = np.random.default_rng(1).standard_normal(64)

    rfft_amp = np.abs(RealFourier(64).forward(x))
    fft_amp = np.abs(ComplexFourier(64).forward(x))

    assert np.allclose(rfft_amp, fft_amp[:33])


def test_length_mismatch():

    with pytest.raises(ValueError):
        RealFourier(8).forward(np.ones(9))

    with pytest.raises(ValueError):
        ComplexFourier(8).forward(np.ones(4))


def test_unknown_transform():

    with pytest.raises(ValueError):
        get_transform('dct', 8)
