from __future__ import annotations

from brightness_notify.config import Settings
from brightness_notify.system.backend import Backend
from brightness_notify.system.backlight import SysfsBackend
from brightness_notify.system.brightnessctl import BrightnessctlBackend


def build_backend(settings: Settings) -> Backend:
    if settings.backend == "brightnessctl":
        return BrightnessctlBackend(settings.brightnessctl_bin)
    return SysfsBackend(tuple(settings.sysfs_roots))
