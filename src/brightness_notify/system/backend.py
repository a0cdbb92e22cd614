from __future__ import annotations

import abc

from brightness_notify.devices import DeviceHandle


class Backend(abc.ABC):
    """A way to enumerate, read and set backlight devices.

    Reads return the raw text so that parsing and error reporting stay in
    one place. Implementations let OSError and subprocess errors propagate.
    """

    name: str

    @abc.abstractmethod
    def list_candidates(self) -> list[DeviceHandle]:
        raise NotImplementedError

    @abc.abstractmethod
    def read_current(self, dev: DeviceHandle) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def read_max(self, dev: DeviceHandle) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, dev: DeviceHandle, value: int) -> None:
        raise NotImplementedError
