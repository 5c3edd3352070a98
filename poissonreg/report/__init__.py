"""
Report layer: data preparation, simulation, diagnostics and plots around
the Poisson fit.

The regression core never reads files or draws figures; everything that
does lives here.
"""

from poissonreg.report.data import load_matches, home_matches, home_design
from poissonreg.report.simulate import simulate_counts
from poissonreg.report.diagnostics import Diagnostics, diagnose, hat_values, ppoints

__all__ = [
    "load_matches",
    "home_matches",
    "home_design",
    "simulate_counts",
    "Diagnostics",
    "diagnose",
    "hat_values",
    "ppoints",
]
