from __future__ import annotations

import logging
import subprocess

from brightness_notify.devices import DeviceHandle
from brightness_notify.system.backend import Backend

log = logging.getLogger(__name__)


class BrightnessctlBackend(Backend):
    """Delegate to the brightnessctl helper, which handles permissions via logind."""

    name = "brightnessctl"

    def __init__(self, bin_path: str = "brightnessctl"):
        self._bin_path = bin_path

    def _run(self, *args: str) -> str:
        cmd = [self._bin_path, *args]
        proc = subprocess.run(cmd, check=True, capture_output=True, text=True)  # noqa: S603
        out = proc.stdout.rstrip("\n")
        log.debug("%s -> %r", " ".join(cmd), out)
        return out

    def list_candidates(self) -> list[DeviceHandle]:
        # Machine-readable rows: name,class,current,percent,max
        out: list[DeviceHandle] = []
        for line in self._run("--list", "--machine-readable", "--class=backlight").splitlines():
            parts = [p.strip() for p in line.split(",")]
            # Some brightnessctl builds list leds rows despite --class.
            if len(parts) < 2 or parts[1] != "backlight" or not parts[0]:
                continue
            out.append(DeviceHandle(name=parts[0], locator=parts[0]))
        return out

    def read_current(self, dev: DeviceHandle) -> str:
        return self._run("--device", dev.locator, "get")

    def read_max(self, dev: DeviceHandle) -> str:
        return self._run("--device", dev.locator, "max")

    def write(self, dev: DeviceHandle, value: int) -> None:
        self._run("--device", dev.locator, "set", str(int(value)))
