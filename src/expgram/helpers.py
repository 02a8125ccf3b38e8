from __future__ import annotations

__all__ = ["JAXArray", "ShapeError", "OrderError"]

import jax

JAXArray = jax.Array


class ShapeError(ValueError):
    """Raised when the system matrices ``A`` and ``B`` have incompatible shapes"""


class OrderError(ValueError):
    """Raised when an unsupported approximation order is requested"""

    def __init__(self, order: int, message: str | None = None):
        self.order = order
        if message is None:
            message = f"Unsupported approximation order: {order}"
        super().__init__(message)
