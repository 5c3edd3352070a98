"""
Core protocols for poissonreg.

Backends are matched structurally (Protocol) rather than by inheritance so
a new solver only has to provide a name and a solve() method.
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Backends are stateless: all configuration is passed to solve(). This
    keeps every fit independent and safe to run from several threads.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_irls'.
        """
        ...

    def solve(self, design: D, **options: Any) -> 'Result[P]':
        """
        Execute the statistical computation.

        Raises:
            ConvergenceError: If the iterative method fails to converge
            NumericalError: If numerical issues prevent a solution
        """
        ...
