"""
distributions.py - Random Variate Samplers

Each sampler validates all of its parameters first, then fills a pre-sized
numpy array of length ``n`` with independent draws produced from the entropy
source. Samplers never return partial results: a call either returns the full
array or raises before any sampling starts.

Available samplers:
- rbinom: Binomial (sum of Bernoulli trials)
- rcauchy: Cauchy (inverse CDF)
- rchisq: (Non-central) chi-squared as a sum of squared normals
- rexp: Exponential (inverse CDF)
- rnbinom: Negative binomial (trials to ``size`` successes, minus one)
- rnorm: Normal (Marsaglia polar method)
- rpois: Poisson (Knuth for small lambda, Bernoulli approximation for large)
- runif: Uniform on [min, max)
- rfml: FML random walk (steps back to the origin)
- ruf: Unreliable Friend (exponential with a uniformly random rate)

Every sampler accepts an optional ``source`` keyword: any callable returning
a uniform [0, 1) float that also provides ``uniform(size)``. It defaults to
the shared ``EntropySource``.

Example Usage:
-------------
    >>> from variate_lab.distributions import rnorm, rpois
    >>>
    >>> x = rnorm(1000, 0, 1)
    >>> k = rpois(1000, 4.5)
"""

from __future__ import annotations

import functools
import math
from typing import Callable, Optional, Union

import numpy as np
from loguru import logger

from .entropy import EntropySource, default_source
from .errors import ConflictingParameters, InvalidProbability, NonWholeOrSubunitSize, RangeInconsistency
from .types import FEWER_PROBLEMS, MORE_PROBLEMS, ProbabilityFunc, Trace, TraceRecord, ValidationRule
from .validation import is_numeric, is_whole, validate

# Large-lambda Poisson draws are approximated by this many Bernoulli trials.
POISSON_BERNOULLI_TRIALS = 10000
POISSON_KNUTH_LIMIT = 30

FML_DEFAULT_CAP = 10000
FML_CAPPED = -1


def _resolve(source: Optional[EntropySource]) -> EntropySource:
    return default_source if source is None else source


# =============================================================================
# DISCRETE
# =============================================================================

def rbinom(n, size=None, p=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Binomial variates.

    Parameters
    ----------
    n : int
        Number of variates to return.
    size : int, default=1
        Number of Bernoulli trials summed per variate.
    p : float, default=0.5
        Probability of success per trial.

    Returns
    -------
    np.ndarray
        Int64 array of success counts in [0, size].
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    size = validate(size, ValidationRule.NON_NEGATIVE_INTEGER, 1, name="size")
    p = validate(p, ValidationRule.PROBABILITY, 0.5, name="p")
    source = _resolve(source)

    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        out[i] = np.count_nonzero(source.uniform(size) < p)
    return out


def rnbinom(n, size=None, p=None, mu=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Negative binomial variates: trials needed to reach ``size`` successes,
    minus one. For ``size=1`` this is the number of failures before the
    first success.

    Exactly one of ``p`` and ``mu`` may be given. A mean ``mu`` is converted
    to a success probability via ``p = size / (size + mu)``.

    Parameters
    ----------
    n : int
        Number of variates to return.
    size : int, default=1
        Target number of successes. Must be a whole number >= 1.
    p : float, optional
        Probability of success per trial, in (0, 1].
    mu : float, optional
        Mean of the distribution, alternative to ``p``.

    Raises
    ------
    NonWholeOrSubunitSize
        If ``size`` is not a whole number or is less than one.
    ConflictingParameters
        If both ``p`` and ``mu`` are given.
    InvalidProbability
        If the (derived) probability is missing, outside [0, 1], or zero.
    """
    n = validate(n, ValidationRule.COUNT, name="n")

    if size is None:
        size = 1
    if not is_numeric(size) or not is_whole(size) or math.isinf(size):
        logger.error(f"Invalid negative binomial size: {size!r}")
        raise NonWholeOrSubunitSize("Size must be a whole number", parameter="size")
    if size < 1:
        logger.error(f"Invalid negative binomial size: {size!r}")
        raise NonWholeOrSubunitSize("Size must be one or greater", parameter="size")
    size = int(size)

    if p is not None and mu is not None:
        logger.error(f"Negative binomial called with both p={p!r} and mu={mu!r}")
        raise ConflictingParameters("You must specify probability or mean, not both", parameter="mu")
    if mu is not None:
        mu = validate(mu, ValidationRule.REAL, name="mu")
        if size + mu == 0:
            logger.error(f"Negative binomial mean mu={mu} cancels size={size}")
            raise InvalidProbability(
                f"Mean {mu} gives an undefined probability for size {size}", parameter="mu"
            )
        p = size / (size + mu)
    p = validate(p, ValidationRule.PROBABILITY, name="p")
    if p == 0:
        # No success is ever observed, so the count never terminates.
        logger.error("Negative binomial called with p=0")
        raise InvalidProbability("Probability of success must be greater than 0", parameter="p")
    source = _resolve(source)

    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        draws = 0
        remaining = size
        while remaining > 0:
            draws += 1
            if source() < p:
                remaining -= 1
        out[i] = draws - 1
    return out


def rpois(n, lam=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Poisson variates.

    For ``lam < 30`` uses Knuth's multiplication method. For ``lam >= 30``
    the draw is approximated by 10,000 Bernoulli trials with success
    probability ``lam / 10000``.

    Parameters
    ----------
    n : int
        Number of variates to return.
    lam : float
        Rate (mean) of the distribution. Must be positive.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    lam = validate(lam, ValidationRule.POSITIVE, name="lambda")
    source = _resolve(source)

    out = np.empty(n, dtype=np.int64)
    if lam < POISSON_KNUTH_LIMIT:
        threshold = math.exp(-lam)
        for i in range(n):
            k = 0
            product = 1.0
            while True:
                k += 1
                product *= source()
                if product <= threshold:
                    break
            out[i] = k - 1
    else:
        trial_p = lam / POISSON_BERNOULLI_TRIALS
        for i in range(n):
            out[i] = np.count_nonzero(source.uniform(POISSON_BERNOULLI_TRIALS) < trial_p)
    return out


# =============================================================================
# CONTINUOUS
# =============================================================================

def rcauchy(n, loc=None, scale=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Cauchy variates via the inverse CDF ``scale * tan(pi * (u - 0.5)) + loc``.

    Parameters
    ----------
    n : int
        Number of variates to return.
    loc : float, default=0
        Location (median).
    scale : float, default=1
        Scale (half width at half maximum). Must be non-negative.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    loc = validate(loc, ValidationRule.REAL, 0, name="loc")
    scale = validate(scale, ValidationRule.NON_NEGATIVE, 1, name="scale")
    source = _resolve(source)

    u = source.uniform(n)
    return scale * np.tan(np.pi * (u - 0.5)) + loc


def rchisq(n, df=None, ncp=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Chi-squared variates as ``ncp`` plus a sum of squared standard normals.

    Parameters
    ----------
    n : int
        Number of variates to return.
    df : float
        Degrees of freedom. Must be non-negative; a fractional value is
        rounded up to the next whole number of squared normals.
    ncp : float, default=0
        Non-centrality offset the sum starts from.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    df = validate(df, ValidationRule.NON_NEGATIVE, name="df")
    ncp = validate(ncp, ValidationRule.REAL, 0, name="ncp")
    source = _resolve(source)

    terms = math.ceil(df)
    out = np.empty(n, dtype=float)
    for i in range(n):
        x = ncp
        for _ in range(terms):
            x += rnorm(1, source=source)[0] ** 2
        out[i] = x
    return out


def rexp(n, rate=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Exponential variates via the inverse CDF ``-ln(u) / rate``.

    A uniform draw of exactly zero is redrawn, keeping every variate finite.

    Parameters
    ----------
    n : int
        Number of variates to return.
    rate : float, default=1
        Rate parameter. Must be positive and finite.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    rate = validate(rate, ValidationRule.POSITIVE, 1, name="rate")
    source = _resolve(source)

    u = source.uniform(n)
    zeros = u == 0
    while zeros.any():
        u[zeros] = source.uniform(int(zeros.sum()))
        zeros = u == 0
    return -np.log(u) / rate


def rnorm(n, mean=None, sd=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Normal variates using the Marsaglia polar method.

    Pairs of uniforms are mapped onto the square [-1, 1)^2 and redrawn until
    they land strictly inside the unit circle (excluding its centre).

    Parameters
    ----------
    n : int
        Number of variates to return.
    mean : float, default=0
        Mean of the distribution.
    sd : float, default=1
        Standard deviation. Must be non-negative.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    mean = validate(mean, ValidationRule.REAL, 0, name="mean")
    sd = validate(sd, ValidationRule.NON_NEGATIVE, 1, name="sd")
    source = _resolve(source)

    out = np.empty(n, dtype=float)
    for i in range(n):
        while True:
            u1, u2 = source.uniform(2)
            v1 = 2 * u1 - 1
            v2 = 2 * u2 - 1
            s = v1 * v1 + v2 * v2
            if 0 < s <= 1:
                break
        out[i] = mean + sd * v1 * math.sqrt(-2 * math.log(s) / s)
    return out


def runif(n, min=None, max=None, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Uniform variates on [min, max).

    Raises
    ------
    RangeInconsistency
        If ``min`` is greater than ``max``.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    low = validate(min, ValidationRule.REAL, 0, name="min")
    high = validate(max, ValidationRule.REAL, 1, name="max")
    if low > high:
        logger.error(f"runif called with min={low} > max={high}")
        raise RangeInconsistency(
            "Minimum value cannot be greater than maximum value", parameter="min"
        )
    source = _resolve(source)

    u = source.uniform(n)
    span = high - low
    if math.isinf(span):
        # finite bounds of opposite sign whose difference overflows
        return low + u * high - u * low
    return low + u * span


# =============================================================================
# NOVELTY DISTRIBUTIONS
# =============================================================================

def rfml(
    n,
    loc=None,
    p: Union[ProbabilityFunc, float, None] = None,
    cap=None,
    trace: Optional[Trace] = None,
    *,
    source: Optional[EntropySource] = None
) -> np.ndarray:
    """
    FML distribution: steps a random walk takes to get back to the origin.

    Each variate starts a walk at ``loc`` with a transition probability
    ``p()`` drawn once for that variate. At every step a uniform draw below
    that probability moves the walk one unit away from the origin ("one more
    problem"); otherwise it moves one unit closer. The walk stops when the
    position reaches zero or below, or after ``cap`` steps.

    Parameters
    ----------
    n : int
        Number of variates to return.
    loc : float, default=1
        Starting position.
    p : callable or float, optional
        Zero-argument callable giving the per-variate probability of moving
        away from the origin. A plain probability is used for every variate.
        Defaults to the entropy source, i.e. a fresh U(0, 1) per variate.
    cap : int, default=10000
        Maximum steps per walk.
    trace : MutableMapping, optional
        Caller-owned mapping that receives a ``TraceRecord`` for every step,
        keyed ``"{variate}_{step}"``.

    Returns
    -------
    np.ndarray
        Int64 array of step counts; -1 marks a walk that used all ``cap``
        steps, including one that reaches the origin on the last step.

    Examples
    --------
    >>> trace = {}
    >>> steps = rfml(3, trace=trace)
    >>> trace["0_0"].outcome in ("One more problem", "One fewer problem")
    True
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    loc = validate(loc, ValidationRule.REAL, 1, name="loc")
    cap = validate(cap, ValidationRule.COUNT, FML_DEFAULT_CAP, name="cap")
    source = _resolve(source)

    draw_p: Callable[[], float]
    if p is None:
        draw_p = source
    elif callable(p):
        draw_p = p
    else:
        fixed_p = validate(p, ValidationRule.PROBABILITY, name="p")
        draw_p = functools.partial(float, fixed_p)

    out = np.empty(n, dtype=np.int64)
    capped = 0
    for i in range(n):
        x = 0
        s = loc
        curr_p = draw_p()
        while True:
            if source() < curr_p:
                s += 1
                outcome = MORE_PROBLEMS
            else:
                s -= 1
                outcome = FEWER_PROBLEMS
            if trace is not None:
                trace[f"{i}_{x}"] = TraceRecord(position=s, probability=curr_p, outcome=outcome)
            x += 1
            if s <= 0 or x >= cap:
                break

        if x >= cap:
            out[i] = FML_CAPPED
            capped += 1
        else:
            out[i] = x

    if capped:
        logger.debug(f"rfml: {capped}/{n} walks hit the cap of {cap} steps")
    return out


def ruf(n, *, source: Optional[EntropySource] = None) -> np.ndarray:
    """
    Unreliable Friend distribution: exponential draws whose rate is itself
    a fresh U(0, 1) draw.

    Each variate calls ``rexp`` with the random rate, so a rate of exactly
    zero is rejected by the exponential sampler's own validation
    (``InvalidPositive``) rather than producing an infinite value.
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    source = _resolve(source)

    out = np.empty(n, dtype=float)
    for i in range(n):
        out[i] = rexp(1, source(), source=source)[0]
    return out
