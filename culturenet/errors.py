"""Error taxonomy shared by graph construction and diffusion runs."""


class CultureNetError(Exception):
    """Base class for failures raised by a simulation run."""


class InvalidParameter(CultureNetError, ValueError):
    """Raised when a parameter is malformed, before any simulation work."""


class NonTerminatingRetry(CultureNetError):
    """Raised when the compensating-flip search exceeds its retry bound.

    Carries the node whose flip could not be compensated, the opinion the
    compensating node had to hold, and how many draws were attempted.
    """

    def __init__(self, node: int, opinion: int, attempts: int) -> None:
        self.node = node
        self.opinion = opinion
        self.attempts = attempts
        super().__init__(
            f"No compensating flip for node {node} (opinion {opinion}) "
            f"after {attempts} draws"
        )
