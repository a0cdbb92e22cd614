from __future__ import annotations

import enum
import logging
import subprocess
from dataclasses import dataclass, field
from typing import Protocol

from brightness_notify import store
from brightness_notify.config import Direction, RunConfig, Settings
from brightness_notify.devices import DeviceHandle, NoDeviceFound, resolve
from brightness_notify.errors import BrightnessError
from brightness_notify.identity import IdentityStore
from brightness_notify.notify import Notification
from brightness_notify.stepping import next_value
from brightness_notify.system.backend import Backend

EXIT_OK = 0


class Stage(enum.Enum):
    INIT = "init"
    RESOLVE = "resolve"
    READ_STATE = "read_state"
    COMPUTE = "compute"
    APPLY = "apply"
    NOTIFY = "notify"
    PERSIST = "persist"
    DONE = "done"
    FAILED = "failed"


class Notifier(Protocol):
    def send(self, n: Notification) -> int: ...


@dataclass
class Controller:
    """One brightness adjustment, from device lookup to notification bookkeeping.

    A failed notification or id save never undoes the brightness change; it
    only changes the exit code.
    """

    cfg: RunConfig
    settings: Settings
    backend: Backend
    notifier: Notifier
    identity: IdentityStore
    log: logging.Logger = field(default_factory=lambda: logging.getLogger("brightness_notify"))

    def __post_init__(self) -> None:
        self.stage = Stage.INIT
        self.failed_stage: Stage | None = None
        self.state: store.BrightnessState | None = None

    def _enter(self, stage: Stage) -> None:
        self.stage = stage
        self.log.debug("stage: %s", stage.value)

    def _resolve(self) -> DeviceHandle:
        self._enter(Stage.RESOLVE)
        try:
            candidates = self.backend.list_candidates()
        except (OSError, subprocess.SubprocessError) as e:
            raise NoDeviceFound(f"can't enumerate backlight devices: {e}") from e
        dev = resolve(candidates, self.cfg.device_hint)
        self.log.debug("using %s backend device %s (%s)", self.backend.name, dev.name, dev.locator)
        return dev

    def _adjust(self) -> store.BrightnessState:
        dev = self._resolve()

        self._enter(Stage.READ_STATE)
        state = store.read(self.backend, dev)
        self.log.debug("brightness: current=%d max=%d", state.current, state.max)

        self._enter(Stage.COMPUTE)
        state.set = next_value(state.current, state.max, self.cfg.direction)
        self.state = state

        if self.cfg.direction is Direction.NONE:
            self.log.debug("no direction given, leaving brightness at %d", state.set)
            return state

        self._enter(Stage.APPLY)
        self.log.debug("setting brightness to %d, which is %d%%", state.set, state.percent)
        store.apply(self.backend, state)
        return state

    def _notify(self, state: store.BrightnessState) -> int:
        self._enter(Stage.NOTIFY)
        n = Notification.brightness(
            self.settings.notification, state.percent, replaces_id=self.identity.load()
        )
        return self.notifier.send(n)

    def _persist(self, notification_id: int) -> None:
        self._enter(Stage.PERSIST)
        self.identity.save(notification_id)

    def _fail(self, err: BrightnessError) -> int:
        self.failed_stage = self.stage
        self.stage = Stage.FAILED
        self.log.error("%s", err)
        return err.exit_code

    def run(self) -> int:
        try:
            state = self._adjust()
            notification_id = self._notify(state)
            self._persist(notification_id)
        except BrightnessError as e:
            return self._fail(e)
        self._enter(Stage.DONE)
        return EXIT_OK
