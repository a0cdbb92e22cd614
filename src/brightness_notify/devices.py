from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from brightness_notify.errors import BrightnessError


class DeviceError(BrightnessError):
    exit_code = 6


class NoDeviceFound(DeviceError):
    pass


class AmbiguousDevice(DeviceError):
    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(
            "several backlight devices found, pass one of them as an argument: " + ", ".join(names)
        )


class DeviceNotFound(DeviceError):
    def __init__(self, hint: str, names: list[str]):
        self.hint = hint
        self.names = names
        super().__init__(f"no backlight device named {hint!r}, available: " + ", ".join(names))


@dataclass(frozen=True)
class DeviceHandle:
    """A backlight control surface.

    ``name`` is what users type to pick it; ``locator`` is what the backend
    needs to reach it (a sysfs directory or a brightnessctl device name).
    """

    name: str
    locator: str


def index_by_name(candidates: Iterable[DeviceHandle]) -> dict[str, DeviceHandle]:
    out: dict[str, DeviceHandle] = {}
    for dev in candidates:
        out.setdefault(dev.name, dev)
    return out


def resolve(candidates: Iterable[DeviceHandle], hint: str | None = None) -> DeviceHandle:
    """Pick the device to operate on.

    A single candidate is used as is and the hint is ignored. With several
    candidates the hint must name one of them.
    """

    by_name = index_by_name(candidates)
    if not by_name:
        raise NoDeviceFound("no backlight device found")
    if len(by_name) == 1:
        return next(iter(by_name.values()))

    names = sorted(by_name)
    if not hint:
        raise AmbiguousDevice(names)
    if hint not in by_name:
        raise DeviceNotFound(hint, names)
    return by_name[hint]
