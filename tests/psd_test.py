import pytest

import numpy as np

from pyiaaft.psd import (
    PSD, periodogram_estimation, multitaper_estimation, welch_estimation,
    get_estimator, bin_psd, binned_deviation)


@pytest.mark.parametrize('estimator', [
    periodogram_estimation, multitaper_estimation, welch_estimation])
def test_peak_frequency(estimator):

    t = np.arange(1024)
    x = np.sin(2 * np.pi * 0.125 * t)

    psd = estimator(x)

    assert psd.freq.shape == psd.psd.shape
    assert psd.freq[0] == 0
    assert psd.freq[-1] <= 0.5
    assert (psd.psd >= 0).all()
    assert abs(psd.freq[np.argmax(psd.psd)] - 0.125) < 0.02


def test_periodogram_parseval():

    x = np.random.default_rng(0).standard_normal(256)
    psd = periodogram_estimation(x)

    df = psd.freq[1] - psd.freq[0]
    assert np.isclose(psd.psd.sum() * df, np.mean(x ** 2), rtol=1e-10)


def test_multitaper_short_signal():

    with pytest.warns(UserWarning):
        psd = multitaper_estimation(np.arange(6, dtype=float), nw=4)

    assert psd.psd.shape == (4,)


def test_get_estimator():

    assert get_estimator('periodogram') is periodogram_estimation
    assert get_estimator('multitaper') is multitaper_estimation
    assert get_estimator('welch') is welch_estimation

    with pytest.raises(ValueError):
        get_estimator('lomb-scargle')


def test_bin_constant():

    freq = np.linspace(0, 0.5, 257)
    binned = bin_psd(PSD(freq=freq, psd=np.full(257, 3.0)), 75)

    assert binned.psd.shape == (75,)
    assert np.allclose(binned.psd, 3.0)
    assert (binned.freq > 0).all() and (binned.freq < 0.5).all()


def test_bin_average():

    freq = np.linspace(0, 0.5, 101)
    binned = bin_psd(PSD(freq=freq, psd=2 * freq), 5)

    assert np.allclose(binned.freq, [0.05, 0.15, 0.25, 0.35, 0.45])
    assert np.allclose(binned.psd, 2 * binned.freq, atol=0.01)


def test_bin_finer_than_resolution():

    # 5 frequencies spread over 75 windows: most windows are interpolated
    freq = np.linspace(0, 0.5, 5)
    binned = bin_psd(PSD(freq=freq, psd=2 * freq), 75)

    assert np.isfinite(binned.psd).all()
    assert np.allclose(binned.psd, 2 * binned.freq, atol=1 / 75)


def test_bin_keeps_isolated_peak():

    freq = np.linspace(0, 0.5, 257)
    power = np.zeros(257)
    power[17] = 1.0

    binned = bin_psd(PSD(freq=freq, psd=power), 75)

    assert binned.psd.sum() > 0


def test_binned_deviation():

    ref = PSD(freq=np.arange(4), psd=np.array([1.0, 2.0, 3.0, 4.0]))

    assert binned_deviation(ref, ref) == 0
    assert np.isclose(
        binned_deviation(ref, PSD(freq=ref.freq, psd=np.zeros(4))), 1.0)
    assert np.isclose(
        binned_deviation(ref, PSD(freq=ref.freq, psd=2 * ref.psd)), 1.0)
