from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from brightness_notify.devices import DeviceHandle
from brightness_notify.system.backend import Backend

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SysfsBackend(Backend):
    """Kernel backlight class devices, e.g. /sys/class/backlight/intel_backlight."""

    roots: tuple[str, ...] = ("/sys/class/backlight",)
    name = "sysfs"

    def _scan(self) -> list[Path]:
        found: list[Path] = []
        for root in self.roots:
            base = Path(root)
            if not base.is_dir():
                log.debug("skipping missing backlight root %s", base)
                continue
            for entry in base.iterdir():
                if (entry / "max_brightness").is_file():
                    found.append(entry)
        return found

    def list_candidates(self) -> list[DeviceHandle]:
        # /sys/class/backlight entries are symlinks into /sys/devices, so the
        # same surface can show up under several roots.
        real: dict[Path, Path] = {}
        for entry in self._scan():
            real.setdefault(entry.resolve(), entry)

        out: list[DeviceHandle] = []
        taken: set[str] = set()
        for target in sorted(real):
            name = target.name
            n = 2
            while name in taken:
                name = f"{target.name}-{n}"
                n += 1
            taken.add(name)
            out.append(DeviceHandle(name=name, locator=str(target)))
        log.debug("sysfs candidates: %s", [d.name for d in out])
        return out

    def read_current(self, dev: DeviceHandle) -> str:
        d = Path(dev.locator)
        # actual_brightness reflects the hardware; brightness is the last request.
        src = d / "actual_brightness"
        if not src.is_file():
            src = d / "brightness"
        return src.read_text(encoding="utf-8")

    def read_max(self, dev: DeviceHandle) -> str:
        return (Path(dev.locator) / "max_brightness").read_text(encoding="utf-8")

    def write(self, dev: DeviceHandle, value: int) -> None:
        (Path(dev.locator) / "brightness").write_text(str(int(value)), encoding="utf-8")
