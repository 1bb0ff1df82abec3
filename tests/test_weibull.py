import math

import numpy as np
import pytest
from scipy import stats as sps

from statdist.core import InvalidParameterError
from statdist.distributions import exponential, rayleigh, weibull
from statdist.distributions.weibull import rayleigh_to_weibull


@pytest.mark.parametrize("scale,shape", [(1.0, 1.0), (2.5, 0.7), (12.0, 2.5)])
def test_weibull_against_scipy(scale: float, shape: float) -> None:
    oracle = sps.weibull_min(c=shape, scale=scale)
    for x in (0.1, 0.5, 1.0, 3.0, 10.0):
        assert weibull.pdf(x, scale, shape) == pytest.approx(oracle.pdf(x), rel=1e-10)
        assert weibull.cdf(x, scale, shape) == pytest.approx(oracle.cdf(x), rel=1e-10)
    for p in (0.05, 0.5, 0.95):
        assert weibull.ppf(p, scale, shape) == pytest.approx(oracle.ppf(p), rel=1e-10)
    mean, var, skew, kurt = oracle.stats(moments="mvsk")
    result = weibull.stats("mvsk", scale, shape)
    assert result["mean"] == pytest.approx(float(mean))
    assert result["variance"] == pytest.approx(float(var))
    assert result["skew"] == pytest.approx(float(skew))
    assert result["kurtosis"] == pytest.approx(float(kurt))


def test_weibull_support_edges() -> None:
    assert weibull.pdf(-1.0, 2.0, 1.5) == 0.0
    assert weibull.cdf(-1.0, 2.0, 1.5) == 0.0
    assert weibull.pdf(0.0, 2.0, 1.0) == pytest.approx(0.5)
    assert weibull.pdf(0.0, 2.0, 3.0) == 0.0
    assert math.isinf(weibull.pdf(0.0, 2.0, 0.5))
    assert weibull.pdf(math.inf, 2.0, 1.5) == 0.0
    assert weibull.cdf(math.inf, 2.0, 1.5) == 1.0
    assert weibull.ppf(0.0, 2.0, 1.5) == 0.0
    assert math.isinf(weibull.ppf(1.0, 2.0, 1.5))


def test_weibull_invalid_parameters() -> None:
    assert weibull.pdf(1.0, 0.0, 2.0) == 0.0
    assert weibull.cdf(1.0, -1.0, 2.0) == 0.0
    with pytest.raises(InvalidParameterError):
        weibull.ppf(0.5, 1.0, 0.0)
    with pytest.raises(InvalidParameterError):
        weibull.stats("m", 0.0, 1.0)
    with pytest.raises(InvalidParameterError):
        weibull.rvs(0.0, 1.0)


def test_weibull_rejects_bad_probability() -> None:
    with pytest.raises(ValueError):
        weibull.ppf(1.5, 1.0, 2.0)
    with pytest.raises(ValueError):
        weibull.isf(-0.1, 1.0, 2.0)


def test_rayleigh_transform() -> None:
    scale, shape = rayleigh_to_weibull(1.0)
    assert scale == pytest.approx(math.sqrt(2.0))
    assert shape == 2.0


@pytest.mark.parametrize("x", [0.3, 1.0, 2.2])
def test_rayleigh_delegates_every_operation(x: float) -> None:
    base = weibull(scale=math.sqrt(2.0), shape=2.0)
    dist = rayleigh(sigma=1.0)
    assert dist.pdf(x) == base.pdf(x)
    assert dist.cdf(x) == base.cdf(x)
    assert dist.sf(x) == base.sf(x)
    p = x / 3.0
    assert dist.ppf(p) == base.ppf(p)
    assert dist.isf(p) == base.isf(p)
    assert dist.stats("mvsk") == base.stats("mvsk")


@pytest.mark.parametrize("sigma", [0.5, 1.0, 3.0])
def test_rayleigh_closed_forms(sigma: float) -> None:
    dist = rayleigh(sigma=sigma)
    x = 1.3
    assert dist.cdf(x) == pytest.approx(1.0 - math.exp(-(x**2) / (2.0 * sigma**2)))
    assert dist.pdf(x) == pytest.approx(x / sigma**2 * math.exp(-(x**2) / (2.0 * sigma**2)))
    result = dist.stats("mv")
    assert result["mean"] == pytest.approx(sigma * math.sqrt(math.pi / 2.0))
    assert result["variance"] == pytest.approx((4.0 - math.pi) / 2.0 * sigma**2)
    oracle = sps.rayleigh(scale=sigma)
    assert dist.ppf(0.3) == pytest.approx(oracle.ppf(0.3))


def test_rayleigh_keyword_and_positional_calls_agree() -> None:
    assert rayleigh.cdf(1.0, sigma=2.0) == rayleigh.cdf(1.0, 2.0) == rayleigh(2.0).cdf(1.0)


def test_rayleigh_validity_follows_transform() -> None:
    assert rayleigh.is_valid(1.0)
    assert not rayleigh.is_valid(0.0)
    assert rayleigh.pdf(1.0, -1.0) == 0.0
    with pytest.raises(InvalidParameterError):
        rayleigh.ppf(0.5, -1.0)


def test_rayleigh_has_no_mass_function() -> None:
    with pytest.raises(TypeError, match="continuous"):
        rayleigh(sigma=1.0).pmf(1.0)


def test_rayleigh_variates_match_delegated_base() -> None:
    draw = rayleigh.rvs(2.0, random_state=np.random.default_rng(9))
    expected = weibull.rvs(2.0 * math.sqrt(2.0), 2.0, random_state=np.random.default_rng(9))
    assert draw == expected
    rng = np.random.default_rng(77)
    draws = np.array([rayleigh.rvs(2.0, random_state=rng) for _ in range(4000)])
    assert draws.min() >= 0
    assert draws.mean() == pytest.approx(2.0 * math.sqrt(math.pi / 2.0), rel=0.05)


def test_exponential_is_weibull_with_unit_shape() -> None:
    dist = exponential(scale=4.0)
    assert dist.cdf(2.0) == pytest.approx(1.0 - math.exp(-0.5))
    assert dist.stats("mv") == pytest.approx({"mean": 4.0, "variance": 16.0})
    assert dist.ppf(0.5) == pytest.approx(4.0 * math.log(2.0))
