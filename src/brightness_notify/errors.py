from __future__ import annotations


class BrightnessError(RuntimeError):
    """Base class for every failure that ends a run."""

    exit_code = 1
