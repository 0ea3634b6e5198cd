"""
samplers.py - Distribution Registry and Sampler Factory

This module maps distribution names onto the sampling functions in
``distributions``:
- DistributionRegistry: Repository of available distributions
- DistributionFactory: Creates bound sampler functions from a name and params
- DistributionInfo: Metadata about a registered distribution

Design Principles:
-----------------
1. Dependency Injection: Samplers draw from an explicit EntropySource
2. Registry Pattern: Distributions are registered and accessed by name
3. Validation: Parameter names are checked when the sampler is created;
   parameter values are checked by the sampling function on every call

Example Usage:
-------------
    >>> from variate_lab.samplers import DistributionFactory
    >>>
    >>> factory = DistributionFactory()
    >>> normal = factory.create("norm", mean=10.0, sd=2.0)
    >>> samples = normal(1000)
    >>>
    >>> # One-shot sampling
    >>> counts = factory.sample("pois", 500, lam=3.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set

import numpy as np
from loguru import logger

from . import distributions
from .entropy import EntropySource, default_source
from .types import SamplerCallable


# =============================================================================
# DISTRIBUTION REGISTRY
# =============================================================================

@dataclass
class DistributionInfo:
    """
    Metadata about a registered distribution.

    Attributes
    ----------
    name : str
        Canonical name of the distribution (lowercase, no ``r`` prefix).
    func : Callable
        The sampling function. Signature: f(n, **params, source=...) -> array.
    required_params : Set[str]
        Parameter names that must be provided.
    optional_params : Dict[str, Any]
        Parameter names with their default values.
    description : str
        Human-readable description of the distribution.
    """
    name: str
    func: Callable
    required_params: Set[str]
    optional_params: Dict[str, Any]
    description: str = ""

    @property
    def params(self) -> Set[str]:
        """All parameter names the distribution accepts."""
        return set(self.required_params) | set(self.optional_params)


class DistributionRegistry:
    """
    Repository of available probability distributions.

    Built-in distributions are pre-registered under their short names
    (``"norm"``, ``"pois"``, ...). Lookups are case-insensitive and also
    accept the sampler function name (``"rnorm"``).

    Examples
    --------
    >>> registry = DistributionRegistry()
    >>> registry.list_distributions()
    ['binom', 'cauchy', 'chisq', 'exp', 'fml', 'nbinom', 'norm', 'pois', 'uf', 'unif']
    >>> registry.get("RNORM").name
    'norm'

    Notes
    -----
    Registered functions must have the signature:
        func(n: int, **params, source: EntropySource) -> np.ndarray
    """

    def __init__(self):
        """Initialize with built-in distributions."""
        self._distributions: Dict[str, DistributionInfo] = {}
        self._register_builtins()

    def _register_builtins(self) -> None:
        """Register the standard set of distributions."""

        self.register(
            name="binom",
            func=distributions.rbinom,
            required_params=set(),
            optional_params={"size": 1, "p": 0.5},
            description="Binomial: successes in `size` Bernoulli(p) trials"
        )

        self.register(
            name="cauchy",
            func=distributions.rcauchy,
            required_params=set(),
            optional_params={"loc": 0, "scale": 1},
            description="Cauchy distribution with given location and scale"
        )

        self.register(
            name="chisq",
            func=distributions.rchisq,
            required_params={"df"},
            optional_params={"ncp": 0},
            description="Chi-squared with df degrees of freedom, offset by ncp"
        )

        self.register(
            name="exp",
            func=distributions.rexp,
            required_params=set(),
            optional_params={"rate": 1},
            description="Exponential distribution with given rate"
        )

        # p and mu are alternatives; rnbinom itself rejects both/neither.
        self.register(
            name="nbinom",
            func=distributions.rnbinom,
            required_params=set(),
            optional_params={"size": 1, "p": None, "mu": None},
            description="Negative binomial: trials to reach `size` successes, minus one"
        )

        self.register(
            name="norm",
            func=distributions.rnorm,
            required_params=set(),
            optional_params={"mean": 0, "sd": 1},
            description="Gaussian/Normal distribution with given mean and sd"
        )

        self.register(
            name="pois",
            func=distributions.rpois,
            required_params={"lam"},
            description="Poisson distribution with rate lam"
        )

        self.register(
            name="unif",
            func=distributions.runif,
            required_params=set(),
            optional_params={"min": 0, "max": 1},
            description="Uniform distribution on [min, max)"
        )

        self.register(
            name="fml",
            func=distributions.rfml,
            required_params=set(),
            optional_params={
                "loc": 1,
                "p": None,
                "cap": distributions.FML_DEFAULT_CAP,
                "trace": None,
            },
            description="FML: steps a random walk needs to return to the origin"
        )

        self.register(
            name="uf",
            func=distributions.ruf,
            required_params=set(),
            description="Unreliable Friend: exponential with a U(0, 1) rate"
        )

    def register(
        self,
        name: str,
        func: Callable,
        required_params: Set[str],
        optional_params: Optional[Dict[str, Any]] = None,
        description: str = ""
    ) -> None:
        """
        Register a new distribution.

        Parameters
        ----------
        name : str
            Name for the distribution (will be lowercased).
        func : Callable
            Sampling function with signature f(n, **params, source=...).
        required_params : Set[str]
            Set of parameter names that must be provided.
        optional_params : Dict[str, Any], optional
            Parameter names with default values.
        description : str, optional
            Human-readable description.

        Examples
        --------
        >>> registry.register(
        ...     name="coin",
        ...     func=lambda n, source: distributions.rbinom(n, 1, 0.5, source=source),
        ...     required_params=set(),
        ...     description="Fair coin flips"
        ... )
        """
        name_lower = name.lower()

        self._distributions[name_lower] = DistributionInfo(
            name=name_lower,
            func=func,
            required_params=required_params,
            optional_params=optional_params or {},
            description=description
        )

    def get(self, name: str) -> DistributionInfo:
        """
        Retrieve a registered distribution.

        Parameters
        ----------
        name : str
            Distribution name (case-insensitive, ``r`` prefix optional).

        Returns
        -------
        DistributionInfo
            The distribution's metadata and function.

        Raises
        ------
        KeyError
            If the distribution is not registered.
        """
        name_lower = name.lower()

        if name_lower not in self._distributions and name_lower.startswith("r"):
            name_lower = name_lower[1:]

        if name_lower not in self._distributions:
            available = ", ".join(sorted(self._distributions.keys()))
            raise KeyError(
                f"Unknown distribution '{name}'. Available: {available}"
            )

        return self._distributions[name_lower]

    def list_distributions(self) -> List[str]:
        """Sorted list of registered distribution names."""
        return sorted(self._distributions.keys())

    def get_info(self, name: str) -> Dict[str, Any]:
        """
        Get detailed information about a distribution.

        Returns
        -------
        Dict[str, Any]
            Dictionary with keys: name, required_params, optional_params, description.
        """
        info = self.get(name)
        return {
            "name": info.name,
            "required_params": info.required_params,
            "optional_params": info.optional_params,
            "description": info.description
        }


# =============================================================================
# DISTRIBUTION FACTORY
# =============================================================================

class DistributionFactory:
    """
    Factory for creating sampler functions from distribution specifications.

    Parameters
    ----------
    source : EntropySource, optional
        Entropy source the samplers draw from. Defaults to the shared
        secure source.
    registry : DistributionRegistry, optional
        Distribution registry to use. If None, creates a new registry with
        built-in distributions.

    Examples
    --------
    >>> factory = DistributionFactory()
    >>> sampler = factory.create("binom", size=10, p=0.3)
    >>> samples = sampler(1000)
    >>> print(f"Mean: {samples.mean():.2f}")

    Notes
    -----
    Parameter names are checked at creation time. Parameter values are
    validated by the underlying sampler, so an out-of-range value surfaces
    as the sampler's ``VariateError`` on the first call.
    """

    def __init__(
        self,
        source: Optional[EntropySource] = None,
        registry: Optional[DistributionRegistry] = None
    ):
        self._source = source if source is not None else default_source
        self._registry = registry if registry is not None else DistributionRegistry()

    @property
    def source(self) -> EntropySource:
        """The entropy source used by this factory."""
        return self._source

    @property
    def registry(self) -> DistributionRegistry:
        """The distribution registry used by this factory."""
        return self._registry

    def list_distributions(self) -> List[str]:
        """Sorted list of available distribution names."""
        return self._registry.list_distributions()

    def create(self, dist_name: str, **params) -> SamplerCallable:
        """
        Create a sampler function for the specified distribution.

        Parameters
        ----------
        dist_name : str
            Name of the distribution (case-insensitive).
        **params
            Distribution-specific parameters (e.g., mean, sd for norm).

        Returns
        -------
        SamplerCallable
            A callable that takes a sample count n and returns n variates.

        Raises
        ------
        KeyError
            If the distribution is not registered.
        ValueError
            If required parameters are missing or unknown ones are given.
        """
        info = self._registry.get(dist_name)

        self._validate_params(info, params)

        # Unset optional parameters fall through to the sampler's defaults.
        full_params = {**info.optional_params, **params}

        source = self._source
        func = info.func
        logger.debug(f"Created '{info.name}' sampler with params {params}")

        def sampler(n: int) -> np.ndarray:
            """
            Sample from the distribution.

            Parameters
            ----------
            n : int
                Number of variates.

            Returns
            -------
            np.ndarray
                Array of n variates.
            """
            return func(n, **full_params, source=source)

        return sampler

    def sample(self, dist_name: str, n: int, **params) -> np.ndarray:
        """Create a sampler and draw ``n`` variates from it in one step."""
        return self.create(dist_name, **params)(n)

    def _validate_params(
        self,
        info: DistributionInfo,
        params: Dict[str, Any]
    ) -> None:
        """Validate that required parameters are provided and none are unknown."""
        missing = info.required_params - set(params.keys())

        if missing:
            raise ValueError(
                f"Distribution '{info.name}' requires parameters: {missing}. "
                f"Got: {set(params.keys())}"
            )

        unknown = set(params.keys()) - info.params
        if unknown:
            raise ValueError(
                f"Distribution '{info.name}' does not accept parameters: {unknown}. "
                f"Accepted: {info.params}"
            )
