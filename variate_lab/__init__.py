"""
variate_lab - Random Variate Generation from a Secure Entropy Source
"""

__version__ = "1.0.0"

# =============================================================================
# CORE TYPES
# =============================================================================
from .types import (
    ValidationRule,
    ErrorKind,
    ValidationResult,
    TraceRecord,
    SamplerCallable,
)

# =============================================================================
# ERRORS
# =============================================================================
from .errors import (
    VariateError,
    MissingOrInvalidCount,
    InvalidProbability,
    InvalidPositive,
    InvalidReal,
    InvalidNonNegative,
    InvalidNonNegativeInteger,
    ConflictingParameters,
    RangeInconsistency,
    NonWholeOrSubunitSize,
    EntropyError,
)

# =============================================================================
# ENTROPY
# =============================================================================
from .entropy import (
    EntropySource,
    prng,
)

# =============================================================================
# VALIDATION
# =============================================================================
from .validation import (
    validate,
    check,
)

# =============================================================================
# DISTRIBUTIONS
# =============================================================================
from .distributions import (
    rbinom,
    rcauchy,
    rchisq,
    rexp,
    rnbinom,
    rnorm,
    rpois,
    runif,
    rfml,
    ruf,
)

# =============================================================================
# HELPERS
# =============================================================================
from .helpers import factorial

# =============================================================================
# SAMPLERS
# =============================================================================
from .samplers import (
    DistributionFactory,
    DistributionRegistry,
    DistributionInfo,
)

# PUBLIC API
# =============================================================================
__all__ = [
    "__version__",
    "ValidationRule",
    "ErrorKind",
    "ValidationResult",
    "TraceRecord",
    "SamplerCallable",
    "VariateError",
    "MissingOrInvalidCount",
    "InvalidProbability",
    "InvalidPositive",
    "InvalidReal",
    "InvalidNonNegative",
    "InvalidNonNegativeInteger",
    "ConflictingParameters",
    "RangeInconsistency",
    "NonWholeOrSubunitSize",
    "EntropyError",
    "EntropySource",
    "prng",
    "validate",
    "check",
    "rbinom",
    "rcauchy",
    "rchisq",
    "rexp",
    "rnbinom",
    "rnorm",
    "rpois",
    "runif",
    "rfml",
    "ruf",
    "factorial",
    "DistributionFactory",
    "DistributionRegistry",
    "DistributionInfo",
]
