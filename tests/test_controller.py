from __future__ import annotations

import logging
from pathlib import Path

import pytest

from brightness_notify import cli
from brightness_notify.config import Direction, RunConfig, Settings
from brightness_notify.controller import Controller, Stage
from brightness_notify.identity import IdentityStore
from brightness_notify.notify import Notification, NotifyError
from brightness_notify.system.backlight import SysfsBackend


class FakeNotifier:
    def __init__(self, next_id: int = 17, fail: bool = False):
        self.next_id = next_id
        self.fail = fail
        self.sent: list[Notification] = []

    def send(self, n: Notification) -> int:
        if self.fail:
            raise NotifyError("failed to send notification: no session bus")
        self.sent.append(n)
        return self.next_id


def _controller(
    tmp_path: Path,
    roots: list[Path],
    direction: Direction = Direction.INCREASE,
    hint: str | None = None,
    notifier: FakeNotifier | None = None,
    identity: IdentityStore | None = None,
) -> Controller:
    return Controller(
        cfg=RunConfig(direction=direction, device_hint=hint),
        settings=Settings(),
        backend=SysfsBackend(tuple(str(r) for r in roots)),
        notifier=notifier or FakeNotifier(),
        identity=identity or IdentityStore(tmp_path / "state" / "notification-id"),
        log=logging.getLogger("test"),
    )


def test_increase_end_to_end(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    notifier = FakeNotifier(next_id=17)
    ids = IdentityStore(tmp_path / "state" / "notification-id")
    ids.save(5)

    ctl = _controller(tmp_path, [backlight_root], notifier=notifier, identity=ids)
    assert ctl.run() == 0
    assert ctl.stage is Stage.DONE

    assert (d / "brightness").read_text(encoding="utf-8") == "72"
    (n,) = notifier.sent
    assert n.replaces_id == 5
    assert n.percent == 72
    assert n.body == n.summary == "Brightness set to: 72%"
    assert n.expire_timeout_ms == 2000
    assert ids.load() == 17


def test_second_run_replaces_first(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    notifier = FakeNotifier(next_id=9)
    assert _controller(tmp_path, [backlight_root], notifier=notifier).run() == 0
    assert _controller(tmp_path, [backlight_root], notifier=notifier).run() == 0
    assert [n.replaces_id for n in notifier.sent] == [0, 9]


def test_no_direction_skips_write(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 30, 60)
    (d / "brightness").write_text("untouched", encoding="utf-8")
    notifier = FakeNotifier()

    ctl = _controller(tmp_path, [backlight_root], direction=Direction.NONE, notifier=notifier)
    assert ctl.run() == 0
    assert (d / "brightness").read_text(encoding="utf-8") == "untouched"
    assert notifier.sent[0].percent == 50


def test_no_device(tmp_path: Path, backlight_root: Path) -> None:
    notifier = FakeNotifier()
    ctl = _controller(tmp_path, [backlight_root], notifier=notifier)
    assert ctl.run() == 6
    assert ctl.stage is Stage.FAILED
    assert ctl.failed_stage is Stage.RESOLVE
    assert notifier.sent == []


def test_ambiguous_then_hinted(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    a = make_backlight(backlight_root, "acpi_video0", 9, 15)
    b = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)

    assert _controller(tmp_path, [backlight_root]).run() == 6
    assert _controller(tmp_path, [backlight_root], hint="nope").run() == 6

    assert _controller(tmp_path, [backlight_root], hint="acpi_video0").run() == 0
    assert (a / "brightness").read_text(encoding="utf-8") == "12"
    assert (b / "brightness").read_text(encoding="utf-8") == "64\n"


def test_read_failure(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    (d / "actual_brightness").write_text("n/a", encoding="utf-8")
    ctl = _controller(tmp_path, [backlight_root])
    assert ctl.run() == 5
    assert ctl.failed_stage is Stage.READ_STATE


def test_write_failure(tmp_path: Path, backlight_root: Path, make_backlight) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    (d / "brightness").unlink()
    (d / "brightness").mkdir()
    notifier = FakeNotifier()
    ctl = _controller(tmp_path, [backlight_root], notifier=notifier)
    assert ctl.run() == 2
    assert ctl.failed_stage is Stage.APPLY
    assert notifier.sent == []


def test_notify_failure_keeps_brightness(
    tmp_path: Path, backlight_root: Path, make_backlight, caplog: pytest.LogCaptureFixture
) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    ids = IdentityStore(tmp_path / "state" / "notification-id")
    ids.save(3)
    ctl = _controller(tmp_path, [backlight_root], notifier=FakeNotifier(fail=True), identity=ids)
    with caplog.at_level(logging.ERROR, logger="test"):
        assert ctl.run() == 3
    assert "no session bus" in caplog.text
    assert (d / "brightness").read_text(encoding="utf-8") == "72"
    assert ids.load() == 3


def test_persist_failure_keeps_brightness(
    tmp_path: Path, backlight_root: Path, make_backlight
) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 64, 100)
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    ctl = _controller(
        tmp_path, [backlight_root], identity=IdentityStore(blocker / "notification-id")
    )
    assert ctl.run() == 4
    assert ctl.failed_stage is Stage.PERSIST
    assert (d / "brightness").read_text(encoding="utf-8") == "72"


def test_cli_conflict_before_device_io(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*_a: object, **_kw: object) -> None:
        raise AssertionError("touched a device")

    monkeypatch.setattr(cli, "build_backend", boom)
    monkeypatch.setattr(cli, "load", boom)
    assert cli.execute(["inc", "dec"]) == 1


def test_cli_bad_settings(tmp_path: Path) -> None:
    assert cli.execute(["-c", str(tmp_path / "missing.yaml"), "inc"]) == 1


def test_cli_wires_controller(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, backlight_root: Path, make_backlight
) -> None:
    d = make_backlight(backlight_root, "amdgpu_bl0", 0, 100)
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"sysfs_roots: [{backlight_root}]\n", encoding="utf-8")
    notifier = FakeNotifier(next_id=1)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setattr(cli, "DbusNotifier", lambda: notifier)

    assert cli.execute(["inc", "-c", str(cfg)]) == 0
    assert (d / "brightness").read_text(encoding="utf-8") == "1"
    assert notifier.sent[0].percent == 1
