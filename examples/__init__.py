"""
variate_lab Examples Package
============================

Runnable examples demonstrating variate_lab.

Examples
--------
sample_distributions : module
    Draws from every built-in distribution and compares sample moments.
fml_walk : module
    Runs the FML random walk with a trace and summarizes the walks.

Quick Start
-----------
Run any example directly from the command line:

    $ cd examples
    $ python sample_distributions.py
    $ python fml_walk.py

Or import as modules:

    >>> from examples import run_example
    >>> results = run_example("sample_distributions", n=500)
"""

__version__ = "1.0.0"

__all__ = [
    "sample_distributions",
    "fml_walk",
]


def list_examples():
    """
    List all available examples with descriptions.

    Returns
    -------
    dict
        Dictionary mapping example names to their descriptions.
    """
    return {
        "sample_distributions": (
            "Samples every built-in distribution through DistributionFactory "
            "and prints sample moments next to the theoretical mean."
        ),
        "fml_walk": (
            "Runs the FML random walk with a caller-owned trace and reports "
            "how many walks returned to the origin before the cap."
        ),
    }


def run_example(name, *args, **kwargs):
    """
    Dynamically import and run an example.

    Parameters
    ----------
    name : str
        Name of the example to run (without .py extension).
    *args, **kwargs
        Arguments to pass to the example's main() function.

    Returns
    -------
    result
        Return value from the example's main() function.
    """
    import importlib

    valid_examples = list_examples().keys()
    if name not in valid_examples:
        raise ValueError(
            f"Unknown example '{name}'. Valid examples: {', '.join(valid_examples)}"
        )

    module = importlib.import_module(f"examples.{name}")

    if hasattr(module, "main"):
        return module.main(*args, **kwargs)
    else:
        raise AttributeError(
            f"Example '{name}' does not have a main() function"
        )


__all__.extend([
    "list_examples",
    "run_example",
])
