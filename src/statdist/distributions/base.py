"""Distribution contract, delegation helper and registry infrastructure."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from importlib import import_module, metadata
from pathlib import Path
from typing import Any, Literal

import yaml

from ..core import Moments, RandomState

Kind = Literal["discrete", "continuous"]
Transform = Callable[..., tuple[float, ...]]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "statdist.distributions"


@dataclass(frozen=True, slots=True, eq=False)
class Distribution:
    """Implementation table for one family.

    The callable fields are the stateless form of every operation and take the
    family parameters explicitly, e.g. ``hypergeometric.pdf(2, 10, 5, 4)``.
    Calling the table binds parameters and returns a :class:`Frozen` value.
    """

    name: str
    parameters: tuple[str, ...]
    kind: Kind
    rvs: Callable[..., float]
    pdf: Callable[..., float]
    cdf: Callable[..., float]
    sf: Callable[..., float]
    ppf: Callable[..., float]
    isf: Callable[..., float]
    stats: Callable[..., Moments]
    is_valid: Callable[..., bool]
    defaults: Mapping[str, float] = field(default_factory=dict)
    notes: str | None = None

    def pmf(self, x: float, *args: float, **kwargs: float) -> float:
        """Probability mass; only defined for discrete families."""
        if self.kind != "discrete":
            raise TypeError(f"Distribution '{self.name}' is continuous; use pdf().")
        return self.pdf(x, *args, **kwargs)

    def bind(self, *args: float, **kwargs: float) -> tuple[float, ...]:
        """Resolve positional, keyword and default parameters into a tuple."""
        if len(args) > len(self.parameters):
            raise TypeError(
                f"'{self.name}' takes {len(self.parameters)} parameters, got {len(args)}."
            )
        values = dict(zip(self.parameters, args, strict=False))
        for key, value in kwargs.items():
            if key not in self.parameters:
                raise TypeError(f"'{self.name}' has no parameter '{key}'.")
            if key in values:
                raise TypeError(f"Parameter '{key}' of '{self.name}' given twice.")
            values[key] = value
        missing = [name for name in self.parameters if name not in values]
        for name in missing:
            if name not in self.defaults:
                raise TypeError(f"Missing parameter '{name}' for '{self.name}'.")
            values[name] = self.defaults[name]
        return tuple(values[name] for name in self.parameters)

    def __call__(self, *args: float, **kwargs: float) -> Frozen:
        bound = Frozen(self, self.bind(*args, **kwargs))
        if not bound.is_valid:
            logger.debug("Bound %r outside its valid parameter domain", bound)
        return bound


@dataclass(frozen=True, slots=True, repr=False)
class Frozen:
    """A family with its parameters fixed; forwards to the stateless form."""

    distribution: Distribution
    args: tuple[float, ...]

    @property
    def name(self) -> str:
        return self.distribution.name

    @property
    def params(self) -> dict[str, float]:
        return dict(zip(self.distribution.parameters, self.args, strict=True))

    @property
    def is_valid(self) -> bool:
        return bool(self.distribution.is_valid(*self.args))

    def rvs(self, random_state: RandomState = None) -> float:
        return self.distribution.rvs(*self.args, random_state=random_state)

    def pmf(self, x: float) -> float:
        return self.distribution.pmf(x, *self.args)

    def pdf(self, x: float) -> float:
        return self.distribution.pdf(x, *self.args)

    def cdf(self, x: float) -> float:
        return self.distribution.cdf(x, *self.args)

    def sf(self, x: float) -> float:
        return self.distribution.sf(x, *self.args)

    def ppf(self, p: float) -> float:
        return self.distribution.ppf(p, *self.args)

    def isf(self, p: float) -> float:
        return self.distribution.isf(p, *self.args)

    def stats(self, moments: str = "mv") -> Moments:
        return self.distribution.stats(moments, *self.args)

    def __repr__(self) -> str:
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.params.items())
        return f"{self.name}({rendered})"


def derive(
    name: str,
    base: Distribution,
    parameters: Sequence[str],
    transform: Transform,
    *,
    defaults: Mapping[str, float] | None = None,
    notes: str | None = None,
) -> Distribution:
    """Express a family as a parameter transform into ``base``.

    ``transform`` receives the derived parameters (positionally or by keyword)
    and returns the base parameters in ``base.parameters`` order. It is
    evaluated afresh on every call; the derived family computes nothing itself.
    """

    def rvs(*args: float, random_state: RandomState = None, **kwargs: float) -> float:
        return base.rvs(*transform(*args, **kwargs), random_state=random_state)

    def pdf(x: float, *args: float, **kwargs: float) -> float:
        return base.pdf(x, *transform(*args, **kwargs))

    def cdf(x: float, *args: float, **kwargs: float) -> float:
        return base.cdf(x, *transform(*args, **kwargs))

    def sf(x: float, *args: float, **kwargs: float) -> float:
        return base.sf(x, *transform(*args, **kwargs))

    def ppf(p: float, *args: float, **kwargs: float) -> float:
        return base.ppf(p, *transform(*args, **kwargs))

    def isf(p: float, *args: float, **kwargs: float) -> float:
        return base.isf(p, *transform(*args, **kwargs))

    def stats(moments: str = "mv", *args: float, **kwargs: float) -> Moments:
        return base.stats(moments, *transform(*args, **kwargs))

    def is_valid(*args: float, **kwargs: float) -> bool:
        return base.is_valid(*transform(*args, **kwargs))

    return Distribution(
        name=name,
        parameters=tuple(parameters),
        kind=base.kind,
        rvs=rvs,
        pdf=pdf,
        cdf=cdf,
        sf=sf,
        ppf=ppf,
        isf=isf,
        stats=stats,
        is_valid=is_valid,
        defaults=dict(defaults or {}),
        notes=notes or f"Delegates to '{base.name}'.",
    )


_REGISTRY: dict[str, Distribution] = {}


def list_distributions() -> Iterable[str]:
    """Return registered family names in sorted order."""
    return sorted(_REGISTRY)


def get_distribution(name: str) -> Distribution:
    """Look up a family by case-insensitive name."""
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown distribution '{name}'.") from None


def register_distribution(distribution: Distribution, *, overwrite: bool = False) -> Distribution:
    """Add ``distribution`` to the registry and return it."""
    key = distribution.name.lower()
    if not overwrite and key in _REGISTRY:
        raise ValueError(f"Distribution '{distribution.name}' already registered.")
    _REGISTRY[key] = distribution
    return distribution


def clear_registry() -> None:
    _REGISTRY.clear()


def _resolve_base(base: Distribution | str) -> Distribution:
    return base if isinstance(base, Distribution) else get_distribution(str(base))


def _derive_from_mapping(candidate: Mapping[str, Any]) -> Distribution:
    transform = candidate["transform"]
    if isinstance(transform, str):
        transform = _load_object(transform)
    defaults = {str(key): float(value) for key, value in (candidate.get("defaults") or {}).items()}
    return derive(
        str(candidate["name"]),
        _resolve_base(candidate["base"]),
        tuple(str(param) for param in candidate.get("parameters", [])),
        transform,
        defaults=defaults,
        notes=candidate.get("notes"),
    )


def _call_factory(candidate: Mapping[str, Any]) -> Any:
    factory = _load_object(str(candidate["callable"]))
    return factory(*candidate.get("args", []), **(candidate.get("kwargs") or {}))


def _iter_distributions(candidate: Any) -> Iterable[Distribution]:
    """Expand a plugin or config entry into the families it declares.

    An entry is a :class:`Distribution`, a mapping describing a delegated
    family (``name``/``base``/``transform``), a mapping naming a factory
    (``callable`` with optional ``args``/``kwargs``), an iterable of entries,
    or a zero-argument callable returning any of these.
    """
    if isinstance(candidate, Distribution):
        yield candidate
    elif isinstance(candidate, Mapping) and "callable" in candidate:
        yield from _iter_distributions(_call_factory(candidate))
    elif isinstance(candidate, Mapping) and {"name", "base", "transform"} <= candidate.keys():
        yield _derive_from_mapping(candidate)
    elif isinstance(candidate, Iterable) and not isinstance(candidate, str | bytes | Mapping):
        for item in candidate:
            yield from _iter_distributions(item)
    elif callable(candidate):
        yield from _iter_distributions(candidate())
    else:
        raise TypeError(
            "Unsupported distribution entry. Expected Distribution, iterable of "
            "Distribution instances, a callable returning them, or a mapping with "
            "name/base/transform or callable keys."
        )


def _register_entry(candidate: Any, *, overwrite: bool = True) -> list[str]:
    return [
        register_distribution(dist, overwrite=overwrite).name
        for dist in _iter_distributions(candidate)
    ]


def _load_object(path: str) -> Any:
    """Import ``module:attr`` (or ``module.attr``); ``attr`` may be dotted."""
    module_name, sep, attribute = path.partition(":")
    if not sep:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ValueError(f"Invalid import path '{path}'. Expected 'module:callable'.")
    obj: Any = import_module(module_name)
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise AttributeError(f"'{module_name}' has no attribute '{attribute}'.") from exc
    return obj


def load_entry_points(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Register families published under the ``statdist.distributions`` group."""
    try:
        candidates = metadata.entry_points().select(group=group)
    except Exception as exc:  # pragma: no cover - discovery failure
        logger.debug("Entry point discovery failed: %s", exc)
        return []

    loaded: list[str] = []
    for ep in candidates:
        try:
            loaded.extend(_register_entry(ep.load()))
        except Exception as exc:  # pragma: no cover - plugin failure
            logger.warning("Failed to load distribution entry point '%s': %s", ep.name, exc)
    return loaded


def load_yaml_config(path: str | os.PathLike[str]) -> list[str]:
    """Register the entries listed under ``distributions:`` in a YAML file.

    Broken entries are logged and skipped so one bad declaration does not hide
    the rest of the file.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping distribution config %s (file not found)", path)
        return []
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse distribution config %s: %s", path, exc)
        return []

    registered: list[str] = []
    for item in data.get("distributions", []):
        overwrite = bool(item.get("overwrite", True)) if isinstance(item, Mapping) else True
        try:
            registered.extend(_register_entry(item, overwrite=overwrite))
        except Exception as exc:
            logger.warning("Skipping distribution entry %r in %s: %s", item, path, exc)
    return registered


__all__ = [
    "Distribution",
    "Frozen",
    "Kind",
    "Transform",
    "ENTRY_POINT_GROUP",
    "derive",
    "list_distributions",
    "get_distribution",
    "register_distribution",
    "clear_registry",
    "load_entry_points",
    "load_yaml_config",
]
