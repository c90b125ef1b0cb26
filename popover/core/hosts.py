# File: popover/core/hosts.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-14
# Purpose: Contratos mínimos con el runtime host (medición y viewport).
# Notes:
#   - El core no conoce Qt/DOM: solo estos protocolos.
#   - Las suscripciones devuelven un callable de baja; bajar dos veces es no-op.
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from popover.core.models import ScreenRect, Size

log = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class MeasurementHost(Protocol):
    """Colaborador de layout: tamaño natural del contenido + aviso de cambios."""

    def measure_natural_size(self, content: Any) -> Size:  # pragma: no cover (protocolo)
        ...

    def on_natural_size_change(self, content: Any, callback: Callable[[], None]) -> Unsubscribe:  # pragma: no cover
        ...


class ViewportHost(Protocol):
    """Colaborador de viewport: rect del anchor en pantalla + scroll/resize."""

    def get_screen_rect(self, anchor: Any) -> ScreenRect:  # pragma: no cover (protocolo)
        ...

    def on_scroll(self, callback: Callable[[], None]) -> Unsubscribe:  # pragma: no cover
        ...

    def on_resize(self, callback: Callable[[], None]) -> Unsubscribe:  # pragma: no cover
        ...


class Subscription:
    """Envuelve un unsubscribe del host y lo vuelve idempotente."""

    def __init__(self, unsubscribe: Optional[Unsubscribe], *, name: str = "") -> None:
        self._unsubscribe = unsubscribe
        self._name = name

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def release(self) -> None:
        fn, self._unsubscribe = self._unsubscribe, None
        if fn is None:
            return
        log.debug("release subscription %s", self._name or "?")
        fn()

    # Permite usarla directamente como handle de baja.
    __call__ = release


class SubscriptionGroup:
    """Conjunto de suscripciones liberadas juntas (show/hide, teardown)."""

    def __init__(self) -> None:
        self._subs: list[Subscription] = []

    def __len__(self) -> int:
        return sum(1 for s in self._subs if s.active)

    def add(self, unsubscribe: Optional[Unsubscribe], *, name: str = "") -> Subscription:
        sub = Subscription(unsubscribe, name=name)
        self._subs.append(sub)
        return sub

    def release_all(self) -> None:
        subs, self._subs = self._subs, []
        # Liberar todas aunque una falle; el primer error se propaga al final.
        first_error: BaseException | None = None
        for sub in subs:
            try:
                sub.release()
            except Exception as e:
                log.warning("Fallo liberando suscripción: %s", e)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
