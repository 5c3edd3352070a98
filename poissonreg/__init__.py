"""
poissonreg: log-linear Poisson regression fitted by IRLS.

Fits goals ~ shots style count models with R glm(family = poisson)
semantics and the surrounding report workflow.

Submodules:
    regression: PoissonRegressor, fit(), the fitted-model type
    report: Match data preparation, simulation, diagnostics, plots
    core: Exceptions, validation, Result envelope, numeric kernels
"""

__version__ = "0.1.0"

from poissonreg.core.datasource import DataSource
from poissonreg import regression
from poissonreg import report

__all__ = [
    "__version__",
    "DataSource",
    "regression",
    "report",
]
