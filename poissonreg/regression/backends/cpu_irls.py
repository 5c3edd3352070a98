"""
CPU backend for Poisson regression via IRLS.

Implements Iteratively Reweighted Least Squares (Fisher scoring, which
coincides with Newton-Raphson for the canonical log link). Each iteration
solves a weighted least squares problem via QR on the transformed system
√W·X, √W·z.

Algorithm (after R's glm.fit in src/library/stats/R/glm.R):
    Initialize: μ = y + 0.1, η = log(μ)
    For iteration 1..max_iter:
        z = η + (y - μ) / μ                  # working response
        w = μ                                # working weights, V(μ) = μ
        Solve WLS: min_β || √w·z - √w·X·β ||²  via QR
        η = X @ β
        μ = exp(η)
        Check: |dev - dev_old| / (|dev_old| + 0.1) < tol
"""

import warnings
from typing import Any
import numpy as np
from scipy import stats

from poissonreg.core.result import Result
from poissonreg.core.exceptions import ConvergenceError, SingularMatrixError
from poissonreg.core.compute.timing import Timer
from poissonreg.core.compute.linalg.qr import qr_cpu, qr_solve, unscaled_covariance
from poissonreg.regression.design import Design
from poissonreg.regression.families import Poisson
from poissonreg.regression.solution import PoissonParams

# Fitted rates below this are reported as numerically 0. IRLS stops on the
# relative deviance change long before a vanishing rate reaches MU_MIN.
_ZERO_RATE = np.sqrt(np.finfo(np.float64).eps)


class CPUIRLSBackend:
    """CPU backend using IRLS with QR inner solve.

    Stateless: every call to solve() starts from scratch, so one instance
    can serve concurrent fits.
    """

    @property
    def name(self) -> str:
        return 'cpu_irls'

    def solve(
        self,
        design: Design,
        tol: float = 1e-8,
        max_iter: int = 25,
    ) -> Result[PoissonParams]:
        """Run IRLS to fit the Poisson log-linear model.

        Args:
            design: Validated design (y already checked as counts)
            tol: Convergence tolerance (relative deviance change)
            max_iter: Maximum IRLS iterations

        Returns:
            Result[PoissonParams] for the converged fit

        Raises:
            SingularMatrixError: If √W·X is rank-deficient at any iteration
            ConvergenceError: If max_iter is reached before convergence
        """
        timer = Timer()
        timer.start()

        X, y = design.X, design.y
        n, p = design.n, design.p
        family = Poisson()
        link = family.link

        warnings_list: list[str] = []

        with timer.section('initialize'):
            mu = family.initialize(y)
            eta = link.link(mu)
            dev_old = family.deviance(y, mu)

        converged = False
        change = float('inf')
        coefficients = np.zeros(p)
        dev = dev_old

        with timer.section('irls'):
            for iteration in range(1, max_iter + 1):
                # For the log link dμ/dη = μ and V(μ) = μ, so w = μ
                z = eta + (y - mu) / mu
                w = family.variance(mu)

                sqrt_w = np.sqrt(w)
                X_tilde = X * sqrt_w[:, np.newaxis]
                z_tilde = z * sqrt_w

                try:
                    coefficients, _ = qr_solve(X_tilde, z_tilde, names=design.names)
                except SingularMatrixError as err:
                    err.iteration = iteration
                    raise

                eta = X @ coefficients
                mu = link.linkinv(eta)
                dev = family.deviance(y, mu)

                change = abs(dev - dev_old) / (abs(dev_old) + 0.1)
                if change < tol:
                    converged = True
                    break
                dev_old = dev

        if not converged:
            raise ConvergenceError(
                f"IRLS did not converge in {max_iter} iterations "
                f"(deviance={dev:.6f}, relative change={change:.3e}, tol={tol:.1e})",
                iterations=max_iter,
                final_change=change,
                reason='max_iterations',
                threshold=tol,
                deviance=dev,
                coefficients=coefficients,
            )

        if np.any(mu < _ZERO_RATE):
            msg = "fitted rates numerically 0 occurred"
            warnings_list.append(msg)
            warnings.warn(msg, RuntimeWarning, stacklevel=3)

        # ------------------------------------------------------------------
        # Inference at the converged weights
        # ------------------------------------------------------------------
        with timer.section('covariance'):
            w = family.variance(mu)
            qr_result = qr_cpu(X * np.sqrt(w)[:, np.newaxis])
            if qr_result.rank < p:
                aliased = tuple(design.names[j] for j in qr_result.aliased)
                raise SingularMatrixError(
                    f"X'WX is singular at the converged fit: rank={qr_result.rank}, "
                    f"expected={p}. Collinear with earlier columns: {', '.join(aliased)}",
                    matrix_name='X\'WX',
                    rank=qr_result.rank,
                    expected_rank=p,
                    aliased=aliased,
                    iteration=iteration,
                )
            covariance = unscaled_covariance(qr_result.R)
            standard_errors = np.sqrt(np.diag(covariance))
            z_values = coefficients / standard_errors
            p_values = 2.0 * stats.norm.sf(np.abs(z_values))

        with timer.section('statistics'):
            null_deviance = family.null_deviance(y)
            log_likelihood = family.log_likelihood(y, mu)
            aic = family.aic(y, mu, rank=p)

        timer.stop()

        for arr in (coefficients, standard_errors, z_values, p_values,
                    covariance, mu, eta, w):
            arr.setflags(write=False)

        params = PoissonParams(
            coefficients=coefficients,
            standard_errors=standard_errors,
            z_values=z_values,
            p_values=p_values,
            covariance=covariance,
            fitted_values=mu,
            linear_predictor=eta,
            weights=w,
            y=y,
            X=X,
            deviance=dev,
            null_deviance=null_deviance,
            log_likelihood=log_likelihood,
            aic=aic,
            rank=p,
            df_residual=n - p,
            df_null=n - 1,
            n_iter=iteration,
            names=design.names,
        )

        info: dict[str, Any] = {
            'method': 'irls_qr',
            'iterations': iteration,
            'final_change': change,
            'tol': tol,
            'max_iter': max_iter,
            'start': 'y + 0.1',
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
