from __future__ import annotations

import argparse
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn

import yaml

from brightness_notify import __version__
from brightness_notify.errors import BrightnessError
from brightness_notify.paths import APP_NAME, default_config_path

DEFAULT_ICON = "/usr/share/icons/Papirus/64x64/apps/display-brightness.svg"
BACKENDS = ("sysfs", "brightnessctl")

_INCREASE_WORDS = {"inc", "increase"}
_DECREASE_WORDS = {"dec", "decrease"}


class ConfigError(BrightnessError, ValueError):
    exit_code = 1


class ArgumentConflict(ConfigError):
    pass


class Direction(enum.Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    NONE = "none"

    @classmethod
    def from_flags(cls, inc: bool, dec: bool) -> Direction:
        if inc and dec:
            raise ArgumentConflict("conflicting arguments: increase and decrease both given")
        if inc:
            return cls.INCREASE
        if dec:
            return cls.DECREASE
        return cls.NONE


@dataclass(frozen=True)
class NotificationSettings:
    app_name: str = APP_NAME
    icon: str = DEFAULT_ICON
    expire_timeout_ms: int = 2000


@dataclass(frozen=True)
class Settings:
    backend: str = "sysfs"
    sysfs_roots: tuple[str, ...] = ("/sys/class/backlight",)
    brightnessctl_bin: str = "brightnessctl"
    notification: NotificationSettings = field(default_factory=NotificationSettings)


@dataclass(frozen=True)
class RunConfig:
    direction: Direction = Direction.NONE
    device_hint: str | None = None
    debug: bool = False
    config_path: Path | None = None


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        # Usage errors exit 1 like other ConfigErrors.
        raise ConfigError(message)


def _build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog=APP_NAME,
        description="Step the backlight brightness and show the result as a notification.",
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-d", "--debug", action="store_true", help="Verbose diagnostic output")
    ap.add_argument("-c", "--config", help="Settings file (YAML)")
    ap.add_argument("--inc", "--increase", "-inc", dest="inc", action="store_true")
    ap.add_argument("--dec", "--decrease", "-dec", dest="dec", action="store_true")
    ap.add_argument(
        "tokens",
        nargs="*",
        metavar="inc|dec|DEVICE",
        help="Direction words in any order; anything else names the backlight device",
    )
    return ap


def parse_args(argv: list[str] | None = None) -> RunConfig:
    """Build the run configuration from command line tokens.

    Conflicting directions raise ArgumentConflict before anything touches a device.
    """

    args = _build_parser().parse_intermixed_args(argv)

    inc = bool(args.inc)
    dec = bool(args.dec)
    hint: str | None = None
    for tok in args.tokens:
        word = tok.lower()
        if word in _INCREASE_WORDS:
            inc = True
        elif word in _DECREASE_WORDS:
            dec = True
        else:
            hint = tok

    return RunConfig(
        direction=Direction.from_flags(inc, dec),
        device_hint=hint,
        debug=bool(args.debug),
        config_path=Path(args.config) if args.config else None,
    )


def _mapping(raw: Any, where: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be a mapping")
    return raw


def validate(data: dict[str, Any]) -> Settings:
    backend = str(data.get("backend", "sysfs"))
    if backend not in BACKENDS:
        raise ConfigError(f"backend must be one of {', '.join(BACKENDS)}, got {backend!r}")

    roots = data.get("sysfs_roots", ["/sys/class/backlight"])
    if isinstance(roots, str):
        roots = [roots]
    if not isinstance(roots, list) or not roots:
        raise ConfigError("sysfs_roots must be a non-empty list")

    notif = _mapping(data.get("notification"), "notification")
    try:
        timeout = int(notif.get("expire_timeout_ms", 2000))
    except (TypeError, ValueError) as e:
        raise ConfigError("notification.expire_timeout_ms must be an integer") from e
    if timeout < 0:
        raise ConfigError("notification.expire_timeout_ms must be >= 0")

    return Settings(
        backend=backend,
        sysfs_roots=tuple(str(r).strip() for r in roots),
        brightnessctl_bin=str(data.get("brightnessctl_bin", "brightnessctl")).strip(),
        notification=NotificationSettings(
            app_name=str(notif.get("app_name", APP_NAME)),
            icon=str(notif.get("icon", DEFAULT_ICON)),
            expire_timeout_ms=timeout,
        ),
    )


def load(path: str | Path | None = None) -> Settings:
    """Load settings from YAML.

    Without an explicit path the default location is optional and a missing
    file yields defaults.
    """

    if path is None:
        p = default_config_path()
        if not p.exists():
            return Settings()
    else:
        p = Path(path)

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read settings file {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {p}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    return validate(data)
