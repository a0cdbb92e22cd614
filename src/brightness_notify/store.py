from __future__ import annotations

import subprocess
from dataclasses import dataclass

from brightness_notify.devices import DeviceHandle
from brightness_notify.errors import BrightnessError
from brightness_notify.stepping import percent as to_percent
from brightness_notify.system.backend import Backend


class ReadError(BrightnessError):
    exit_code = 5

    def __init__(self, field: str, cause: BaseException):
        self.field = field
        super().__init__(f"can't read {field} brightness: {cause}")


class WriteError(BrightnessError):
    """The device may hold the old or the new value after this."""

    exit_code = 2


@dataclass
class BrightnessState:
    device: DeviceHandle
    current: int
    max: int
    set: int

    @property
    def percent(self) -> int:
        return to_percent(self.set, self.max)


def _parse(raw: str, field: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ReadError(field, e) from e


def read(backend: Backend, dev: DeviceHandle) -> BrightnessState:
    """Read max then current brightness. ``set`` starts equal to ``current``."""

    try:
        max_value = _parse(backend.read_max(dev), "max")
    except (OSError, subprocess.SubprocessError) as e:
        raise ReadError("max", e) from e
    if max_value <= 0:
        raise ReadError("max", ValueError(f"max brightness must be positive, got {max_value}"))

    try:
        current = _parse(backend.read_current(dev), "current")
    except (OSError, subprocess.SubprocessError) as e:
        raise ReadError("current", e) from e

    return BrightnessState(device=dev, current=current, max=max_value, set=current)


def apply(backend: Backend, state: BrightnessState) -> None:
    if not 0 <= state.set <= state.max:
        raise ValueError(f"brightness {state.set} outside [0, {state.max}]")
    try:
        backend.write(state.device, state.set)
    except (OSError, subprocess.SubprocessError) as e:
        raise WriteError(f"can't set {state.device.name} brightness to {state.set}: {e}") from e
