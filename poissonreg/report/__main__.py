"""
Home-goals report from the command line.

Usage:
    python -m poissonreg.report matches.csv --team Arsenal
    python -m poissonreg.report matches.csv --team Arsenal --plot diag.png
    python -m poissonreg.report --simulate 1000 --beta 0.5 0.1
"""

from __future__ import annotations

import argparse
import sys

import numpy as np

from poissonreg.core.exceptions import PoissonRegError
from poissonreg.regression import PoissonRegressor, PoissonSolution
from poissonreg.report.data import load_matches, home_design
from poissonreg.report.simulate import simulate_counts


def interpret(model: PoissonSolution, level: float = 0.95) -> str:
    """Plain-language reading of each slope as a rate ratio."""
    lines = []
    ci = np.exp(model.conf_int(level))
    for j, row in enumerate(model.coefficient_table()):
        rr = float(np.exp(row.estimate))
        if row.name == '(Intercept)':
            lines.append(f"Expected count when all predictors are 0: {rr:.3f}")
            continue
        lines.append(
            f"Each extra unit of {row.name} multiplies the expected count by "
            f"{rr:.3f} ({100 * (rr - 1):+.1f}%), "
            f"{int(level * 100)}% CI [{ci[j, 0]:.3f}, {ci[j, 1]:.3f}], p = {row.p_value:.3g}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="python -m poissonreg.report",
        description="Fit goals ~ shots for one team's home matches.",
    )
    ap.add_argument("csv", nargs="?", help="Match results CSV (football-data.co.uk layout)")
    ap.add_argument("--team", help="Home team to model")
    ap.add_argument("--goals", default="FTHG", help="Goals column (default: FTHG)")
    ap.add_argument("--shots", default="HS", help="Shots column (default: HS)")
    ap.add_argument("--simulate", type=int, metavar="N",
                    help="Fit N simulated observations instead of a CSV")
    ap.add_argument("--beta", type=float, nargs="+", default=[0.5, 0.1],
                    help="True coefficients for --simulate, intercept first")
    ap.add_argument("--seed", type=int, default=0, help="Seed for --simulate")
    ap.add_argument("--tol", type=float, default=1e-8, help="IRLS deviance tolerance")
    ap.add_argument("--max-iter", type=int, default=25, help="IRLS iteration cap")
    ap.add_argument("--plot", metavar="PATH", help="Write diagnostic plots to PATH")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.simulate is None and (args.csv is None or args.team is None):
        ap.error("either CSV and --team, or --simulate N, is required")

    try:
        if args.simulate is not None:
            design = simulate_counts(args.simulate, args.beta, seed=args.seed)
        else:
            df = load_matches(args.csv)
            design = home_design(df, args.team, goals=args.goals, shots=args.shots)

        model = PoissonRegressor(tol=args.tol, max_iter=args.max_iter).fit(design)
    except (PoissonRegError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(model.summary())
    print()
    print(interpret(model))

    if args.plot:
        from poissonreg.report.plots import plot_diagnostics
        plot_diagnostics(model, args.plot)
        print(f"\nDiagnostic plots written to {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
