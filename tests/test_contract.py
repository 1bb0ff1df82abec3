"""Invariants every registered family must satisfy."""

import numpy as np
import pytest

from statdist.distributions import Frozen, get_distribution

CASES = [
    ("discrete_uniform", {"minimum": 0, "maximum": 5}),
    ("discrete_uniform", {"minimum": -4, "maximum": 7}),
    ("hypergeometric", {"L": 10, "m": 5, "n": 4}),
    ("hypergeometric", {"L": 40, "m": 9, "n": 25}),
    ("weibull", {"scale": 3.0, "shape": 1.7}),
    ("rayleigh", {"sigma": 1.0}),
    ("rayleigh", {"sigma": 2.5}),
    ("exponential", {"scale": 0.5}),
]

PROBABILITIES = (0.01, 0.2, 0.5, 0.77, 0.99)


def _ids(case: tuple[str, dict[str, float]]) -> str:
    name, params = case
    return name + "-" + "-".join(f"{k}{v}" for k, v in params.items())


def _grid(dist: Frozen) -> np.ndarray:
    if dist.distribution.kind == "discrete":
        return np.arange(-3.0, 45.0, 0.5)
    return np.linspace(-1.0, 12.0, 53)


@pytest.fixture(params=CASES, ids=_ids)
def frozen(request: pytest.FixtureRequest) -> Frozen:
    name, params = request.param
    return get_distribution(name)(**params)


def test_survival_complements_cumulative(frozen: Frozen) -> None:
    for x in _grid(frozen):
        assert frozen.sf(x) == pytest.approx(1.0 - frozen.cdf(x), abs=1e-9)


def test_inverse_survival_mirrors_inverse_cumulative(frozen: Frozen) -> None:
    for p in PROBABILITIES:
        assert frozen.isf(p) == frozen.ppf(1.0 - p)


def test_cumulative_is_non_decreasing_and_bounded(frozen: Frozen) -> None:
    values = np.array([frozen.cdf(x) for x in _grid(frozen)])
    assert np.all(np.diff(values) >= 0)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_discrete_mass_sums_to_one(frozen: Frozen) -> None:
    if frozen.distribution.kind != "discrete":
        pytest.skip("continuous family")
    total = sum(frozen.pmf(x) for x in range(-5, 60))
    assert total == pytest.approx(1.0, abs=1e-12)


def test_inversion_recovers_cumulative_value(frozen: Frozen) -> None:
    for x in _grid(frozen):
        level = frozen.cdf(x)
        if level >= 1.0 and frozen.distribution.kind == "continuous":
            continue
        assert frozen.cdf(frozen.ppf(level)) == pytest.approx(level, abs=1e-9)


def test_bound_and_stateless_forms_agree(frozen: Frozen) -> None:
    family = frozen.distribution
    args = frozen.args
    for x in _grid(frozen):
        assert frozen.pdf(x) == family.pdf(x, *args)
        assert frozen.cdf(x) == family.cdf(x, *args)
        assert frozen.sf(x) == family.sf(x, *args)
    for p in PROBABILITIES:
        assert frozen.ppf(p) == family.ppf(p, *args)
        assert frozen.isf(p) == family.isf(p, *args)
    assert frozen.stats("mvsk") == family.stats("mvsk", *args)
    assert frozen.rvs(random_state=np.random.default_rng(3)) == family.rvs(
        *args, random_state=np.random.default_rng(3)
    )


def test_keyword_stateless_form_matches_positional(frozen: Frozen) -> None:
    family = frozen.distribution
    assert family.cdf(1.0, **frozen.params) == family.cdf(1.0, *frozen.args)


def test_pdf_is_alias_of_pmf_for_discrete(frozen: Frozen) -> None:
    if frozen.distribution.kind != "discrete":
        pytest.skip("continuous family")
    for x in range(-2, 10):
        assert frozen.pmf(x) == frozen.pdf(x)


def test_moments_follow_selector(frozen: Frozen) -> None:
    assert list(frozen.stats()) == ["mean", "variance"]
    assert list(frozen.stats("ks")) == ["kurtosis", "skew"]
    assert frozen.stats("") == {}
