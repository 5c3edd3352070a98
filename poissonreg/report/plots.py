"""
Static diagnostic figure for a fitted Poisson model.

matplotlib is an optional dependency (the `plot` extra) and is imported
only when a figure is requested. Figures are built directly on
matplotlib.figure.Figure, without pyplot, so the active backend of the
calling process is left alone and no display is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from poissonreg.regression.solution import PoissonSolution
from poissonreg.report.diagnostics import diagnose


def _require_figure():
    try:
        from matplotlib.figure import Figure
    except ImportError as e:
        raise ImportError(
            "plotting requires matplotlib; install poissonreg[plot]"
        ) from e
    return Figure


def plot_diagnostics(model: PoissonSolution, path: str | Path | None = None) -> Any:
    """Draw the four standard GLM diagnostic panels.

    Panels: residuals vs linear predictor, normal Q-Q of standardized
    deviance residuals, scale-location, and standardized Pearson residuals
    vs leverage.

    Args:
        model: Fitted model
        path: If given, the figure is saved there (format from suffix)

    Returns:
        The matplotlib Figure
    """
    Figure = _require_figure()
    d = diagnose(model)

    fig = Figure(figsize=(9.0, 7.5), dpi=120, layout="tight")
    axes = fig.subplots(2, 2)
    ax_rf, ax_qq, ax_sl, ax_lev = axes.ravel()

    ax_rf.scatter(d.linear_predictor, d.residuals_deviance, s=14, alpha=0.7)
    ax_rf.axhline(0.0, color="grey", linestyle=":")
    ax_rf.set_title("Residuals vs Fitted")
    ax_rf.set_xlabel("Predicted values (log scale)")
    ax_rf.set_ylabel("Deviance residuals")

    ax_qq.scatter(d.qq_theoretical, d.qq_sample, s=14, alpha=0.7)
    if len(d.qq_sample) > 1:
        lo, hi = d.qq_theoretical[0], d.qq_theoretical[-1]
        ax_qq.plot([lo, hi], [lo, hi], color="grey", linestyle="--")
    ax_qq.set_title("Normal Q-Q")
    ax_qq.set_xlabel("Theoretical quantiles")
    ax_qq.set_ylabel("Std. deviance residuals")

    ax_sl.scatter(
        d.linear_predictor, np.sqrt(np.abs(d.std_residuals_deviance)), s=14, alpha=0.7
    )
    ax_sl.set_title("Scale-Location")
    ax_sl.set_xlabel("Predicted values (log scale)")
    ax_sl.set_ylabel("sqrt(|Std. deviance residuals|)")

    ax_lev.scatter(d.hat_values, d.std_residuals_pearson, s=14, alpha=0.7)
    ax_lev.axhline(0.0, color="grey", linestyle=":")
    for i in d.influential():
        ax_lev.annotate(str(i), (d.hat_values[i], d.std_residuals_pearson[i]), fontsize=8)
    ax_lev.set_title("Residuals vs Leverage")
    ax_lev.set_xlabel("Leverage")
    ax_lev.set_ylabel("Std. Pearson residuals")

    if path is not None:
        fig.savefig(Path(path))
    return fig
