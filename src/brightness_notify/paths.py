from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "brightness-notify"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    base = os.environ.get(env_var)
    return Path(base) if base else fallback


def default_config_path(app_name: str = APP_NAME) -> Path:
    """Return the optional settings file location.

    Uses XDG_CONFIG_HOME when available, else ~/.config.
    """

    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config") / app_name / "config.yaml"


def notification_id_path(app_name: str = APP_NAME) -> Path:
    """Return the per-user file holding the last notification id.

    Rationale:
    - the tool runs unprivileged from key bindings, so the file must be user-writable
    - each user gets their own popup to replace

    Uses XDG_STATE_HOME when available, else ~/.local/state.
    """

    state = _xdg_dir("XDG_STATE_HOME", Path.home() / ".local" / "state")
    return state / app_name / "notification-id"
