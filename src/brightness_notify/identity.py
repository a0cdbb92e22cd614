from __future__ import annotations

import os
import re
import tempfile
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from brightness_notify.errors import BrightnessError
from brightness_notify.paths import notification_id_path

_UINT32_MAX = 2**32 - 1
_DIGITS = re.compile(r"\d+", re.ASCII)


class PersistError(BrightnessError):
    exit_code = 4


@dataclass(frozen=True)
class IdentityStore:
    """Remembers the id of the last notification we showed.

    Reading is best effort: any problem means "no previous notification" (0).
    """

    path: Path

    @classmethod
    def default(cls) -> IdentityStore:
        return cls(notification_id_path())

    def load(self) -> int:
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return 0
        if not _DIGITS.fullmatch(raw):
            return 0
        value = int(raw)
        if not 0 <= value <= _UINT32_MAX:
            return 0
        return value

    def save(self, notification_id: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".notification-id.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(str(int(notification_id)))
                os.replace(tmp, self.path)
            except BaseException:
                with suppress(FileNotFoundError):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise PersistError(f"failed to save notification id to {self.path}: {e}") from e
