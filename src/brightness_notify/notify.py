from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from dbus_next import Variant
from dbus_next.aio import MessageBus

from brightness_notify.config import NotificationSettings
from brightness_notify.errors import BrightnessError

BUS = "org.freedesktop.Notifications"
OBJ = "/org/freedesktop/Notifications"

log = logging.getLogger(__name__)


class NotifyError(BrightnessError):
    exit_code = 3


@dataclass(frozen=True)
class Notification:
    app_name: str
    icon: str
    summary: str
    body: str
    percent: int
    replaces_id: int = 0
    expire_timeout_ms: int = 2000

    @classmethod
    def brightness(
        cls, settings: NotificationSettings, percent: int, replaces_id: int = 0
    ) -> Notification:
        text = f"Brightness set to: {percent}%"
        return cls(
            app_name=settings.app_name,
            icon=settings.icon,
            summary=text,
            body=text,
            percent=percent,
            replaces_id=replaces_id,
            expire_timeout_ms=settings.expire_timeout_ms,
        )


class DbusNotifier:
    """Send desktop notifications over the session bus.

    ``send`` blocks until the notification server has answered.
    """

    async def _send(self, n: Notification) -> int:
        bus = await MessageBus().connect()
        try:
            introspection = await bus.introspect(BUS, OBJ)
            obj = bus.get_proxy_object(BUS, OBJ, introspection)
            iface = obj.get_interface(BUS)
            # Notify(app_name, replaces_id, app_icon, summary, body, actions, hints, expire_timeout)
            return int(
                await iface.call_notify(
                    n.app_name,
                    n.replaces_id,
                    n.icon,
                    n.summary,
                    n.body,
                    [],
                    {"value": Variant("i", n.percent)},
                    n.expire_timeout_ms,
                )
            )
        finally:
            bus.disconnect()

    def send(self, n: Notification) -> int:
        try:
            nid = asyncio.run(self._send(n))
        except Exception as e:
            raise NotifyError(f"failed to send notification: {e}") from e
        log.debug("notification id = %d (replaced %d)", nid, n.replaces_id)
        return nid
