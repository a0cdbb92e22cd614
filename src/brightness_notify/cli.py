from __future__ import annotations

import logging
import sys

from brightness_notify.config import ConfigError, load, parse_args
from brightness_notify.controller import Controller
from brightness_notify.identity import IdentityStore
from brightness_notify.notify import DbusNotifier
from brightness_notify.system import build_backend

log = logging.getLogger("brightness_notify")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def execute(argv: list[str] | None = None) -> int:
    """Run once and return the process exit code."""

    try:
        cfg = parse_args(argv)
    except ConfigError as e:
        _setup_logging(False)
        log.error("%s", e)
        return e.exit_code

    _setup_logging(cfg.debug)
    log.debug("run config: %s", cfg)

    try:
        settings = load(cfg.config_path)
    except ConfigError as e:
        log.error("%s", e)
        return e.exit_code

    ctl = Controller(
        cfg=cfg,
        settings=settings,
        backend=build_backend(settings),
        notifier=DbusNotifier(),
        identity=IdentityStore.default(),
        log=log,
    )
    return ctl.run()


def main() -> None:
    sys.exit(execute())
