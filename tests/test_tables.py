import math

import pytest

from statdist.distributions import hypergeometric, rayleigh
from statdist.tables import moments_frame, tabulate


def test_tabulate_columns_and_values() -> None:
    dist = hypergeometric(10, 5, 4)
    frame = tabulate(dist, [0, 1, 2, 3, 4], ("pmf", "cdf", "sf"))
    assert list(frame.columns) == ["x", "pmf", "cdf", "sf"]
    assert len(frame) == 5
    assert frame["pmf"].sum() == pytest.approx(1.0)
    assert frame.loc[2, "pmf"] == pytest.approx(100 / 210)
    assert frame["cdf"].is_monotonic_increasing
    assert (frame["sf"] + frame["cdf"]).tolist() == pytest.approx([1.0] * 5)


def test_tabulate_inverse_columns_take_probabilities() -> None:
    frame = tabulate(rayleigh(1.0), [0.25, 0.5], ("ppf", "isf"))
    assert frame.loc[0, "ppf"] == pytest.approx(math.sqrt(-2.0 * math.log(0.75)))
    assert frame.loc[1, "isf"] == pytest.approx(frame.loc[1, "ppf"])


def test_tabulate_rejects_unknown_operation() -> None:
    with pytest.raises(ValueError, match="Unknown operation"):
        tabulate(rayleigh(1.0), [1.0], ("median",))


def test_moments_frame_rows() -> None:
    frame = moments_frame(
        {"urn": hypergeometric(10, 5, 4), "wind": rayleigh(2.0)},
        "mk",
    )
    assert list(frame.columns) == ["distribution", "mean", "kurtosis"]
    assert frame["distribution"].tolist() == ["urn", "wind"]
    assert frame.loc[0, "mean"] == pytest.approx(2.0)
    assert frame.loc[1, "mean"] == pytest.approx(2.0 * math.sqrt(math.pi / 2.0))
