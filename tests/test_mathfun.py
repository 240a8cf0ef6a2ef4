import math

import numpy as np
import pytest

from lritkit.mathfun import cos_ps, exp_ps, log_ps, sin_ps, sincos_ps

TRIALS = 20000


def _sincos_samples(xmin, xmax, seed):
    rng = np.random.default_rng(seed)
    lo, hi = xmin * math.pi, xmax * math.pi
    i = np.arange(TRIALS, dtype=np.float64)
    a = i * (hi - lo) / (TRIALS - 1) + lo
    b = (i + 0.5) * (hi - lo) / (TRIALS - 1) + lo
    c = rng.random(TRIALS) * (hi - lo)
    d = (np.arange(TRIALS) // 32) * math.pi / ((np.arange(TRIALS) % 32) + 1)
    d = np.where((d < lo) | (d > hi), rng.random(TRIALS) * (hi - lo), d)
    return np.concatenate([a, b, c, d]).astype(np.float32)


@pytest.mark.parametrize("xmin,xmax", [(0.0, 1.0), (-1000.0, 1000.0)])
def test_sincos_precision(xmin, xmax):
    x = _sincos_samples(xmin, xmax, seed=int(xmax))
    sin_test = sin_ps(x)
    cos_test = cos_ps(x)
    sin_ref = np.sin(x.astype(np.float64))
    cos_ref = np.cos(x.astype(np.float64))
    assert np.max(np.abs(sin_ref - sin_test)) < 2e-7
    assert np.max(np.abs(cos_ref - cos_test)) < 2e-7
    s = sin_test.astype(np.float64)
    c = cos_test.astype(np.float64)
    assert np.max(np.abs(1 - s * s - c * c)) < 3e-7


def test_sincos_matches_sin_and_cos():
    x = _sincos_samples(-10.0, 10.0, seed=7)
    s, c = sincos_ps(x)
    assert np.array_equal(s, sin_ps(x))
    assert np.array_equal(c, cos_ps(x))


def test_explog_precision():
    rng = np.random.default_rng(60)
    x = (rng.random(4 * TRIALS) * 120.0 - 60.0).astype(np.float32)
    exp_test = exp_ps(x)
    log_test = log_ps(exp_test)

    exp_ref = np.exp(x)
    rel = np.abs(exp_ref.astype(np.float64) - exp_test) / exp_ref.astype(np.float64)
    assert np.max(rel) < 2e-7

    log_ref = np.log(exp_test).astype(np.float64)
    scale = np.maximum(1.0, np.abs(log_ref))
    assert np.max(np.abs(log_ref - log_test) / scale) < 2e-7

    roundtrip = np.abs(x.astype(np.float64) - log_test) / np.maximum(1.0, np.abs(x))
    assert np.max(roundtrip) < 2e-7


def test_exp_special_values():
    result = exp_ps([-1000, -100, 100, 1000])
    assert result[0] == 0.0
    assert result[1] == 0.0
    assert result[2] == pytest.approx(2.4061436e38, rel=1e-6)
    assert result[3] == pytest.approx(2.4061436e38, rel=1e-6)


def test_exp_nan_and_infinities():
    result = exp_ps([np.nan, np.inf, -np.inf])
    assert result[0] == pytest.approx(2.4061436e38, rel=1e-6)
    assert result[1] == pytest.approx(2.4061436e38, rel=1e-6)
    assert result[2] == 0.0


def test_log_special_values():
    result = log_ps([0.0, -10.0, 1e30])
    assert np.isnan(result[0])
    assert np.isnan(result[1])
    assert result[2] == pytest.approx(69.077553, abs=1e-5)


def test_log_infinities():
    result = log_ps([np.inf, -np.inf, np.nan])
    assert result[0] == pytest.approx(88.722839, abs=1e-5)
    assert np.isnan(result[1])
    assert np.isnan(result[2])


def test_sincos_nan_and_infinities():
    values = [np.nan, np.inf, -np.inf, np.nan]
    sin_result = sin_ps(values)
    cos_result = cos_ps(values)
    assert len(sin_result) == 4
    assert len(cos_result) == 4
    assert [math.isnan(float(v)) for v in sin_result] == [True, True, True, True]
    assert [math.isnan(float(v)) for v in cos_result] == [True, True, True, True]


def test_sin_large_arguments():
    result = sin_ps([-1e30, -100000, 1e30, 100000])
    assert result[0] == np.inf
    assert result[1] == pytest.approx(-0.035749275, abs=1e-6)
    assert result[2] == -np.inf
    assert result[3] == pytest.approx(0.035749275, abs=1e-6)


def test_cos_large_arguments():
    result = cos_ps([-1e30, -100000, 1e30, 100000])
    assert np.isnan(result[0])
    assert result[1] == pytest.approx(-0.9993608, abs=1e-6)
    assert np.isnan(result[2])
    assert result[3] == pytest.approx(-0.9993608, abs=1e-6)


def test_known_angles():
    x = [0.0, math.pi / 6, math.pi / 2, math.pi]
    s, c = sincos_ps(x)
    assert s[0] == 0.0
    assert c[0] == 1.0
    assert s[1] == pytest.approx(0.5, abs=2e-7)
    assert s[2] == pytest.approx(1.0, abs=2e-7)
    assert c[2] == pytest.approx(0.0, abs=2e-7)
    assert c[3] == pytest.approx(-1.0, abs=2e-7)


def test_shape_and_dtype_preserved():
    x = np.linspace(0.5, 2.0, 6).reshape(2, 3)
    for fn in (log_ps, exp_ps, sin_ps, cos_ps):
        out = fn(x)
        assert out.shape == (2, 3)
        assert out.dtype == np.float32
    assert float(log_ps(1.0)) == pytest.approx(0.0, abs=1e-7)
    assert float(exp_ps(0.0)) == pytest.approx(1.0, abs=1e-7)