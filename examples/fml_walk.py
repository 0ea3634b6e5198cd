"""
FML Random Walk Example
=======================

Runs the FML walk with a trace attached and summarizes how often the walks
made it back to the origin before the step cap.
"""
import numpy as np
from variate_lab import rfml


def main(**kwargs):
    print("=" * 70)
    print("FML Random Walk")
    print("=" * 70)

    n = kwargs.get("n", 200)
    cap = kwargs.get("cap", 1000)
    loc = kwargs.get("loc", 1)

    trace = {}
    steps = rfml(n, loc, cap=cap, trace=trace)

    finished = steps[steps >= 0]
    print(f"  walks           : {n}")
    print(f"  reached origin  : {len(finished)}")
    print(f"  hit cap ({cap}) : {n - len(finished)}")
    if len(finished):
        print(f"  median steps    : {np.median(finished):.1f}")
    print(f"  trace entries   : {len(trace)}")

    first = trace.get("0_0")
    if first is not None:
        print(f"  first step      : {first.outcome} (p={first.probability:.3f})")

    return {"steps": steps, "trace": trace}


if __name__ == "__main__":
    main()
