"""Graceful shutdown for GUI pages that own a Coordinator.

Pages register their coordinator here. When a client disconnects or the app
shuts down, every registered coordinator gets a cooperative abort request so
its daemon worker thread leaves its loop instead of being killed mid-run.
"""

from __future__ import annotations

from typing import Dict

from nicegui import app

from nonblocking.core.coordinator import Coordinator
from nonblocking.core.utils.logging import get_logger

logger = get_logger(__name__)

# Key: client ID (str), Value: the page's Coordinator
_COORDINATORS: Dict[str, Coordinator] = {}

_installed = False


def register_coordinator(client_id: str, coordinator: Coordinator) -> None:
    _COORDINATORS[client_id] = coordinator
    logger.debug(f"registered coordinator for client {client_id} (total={len(_COORDINATORS)})")


def unregister_coordinator(client_id: str) -> None:
    """Abort and forget the coordinator of a disconnected client."""
    coordinator = _COORDINATORS.pop(client_id, None)
    if coordinator is None:
        return
    if coordinator.is_outstanding:
        logger.warning(f"client {client_id} disconnected with work outstanding, requesting abort")
    coordinator.on_abort_requested()


def abort_all() -> int:
    """Request abort on every registered coordinator.

    Returns:
        Number of coordinators that had work outstanding.
    """
    outstanding = 0
    for client_id, coordinator in list(_COORDINATORS.items()):
        if coordinator.is_outstanding:
            outstanding += 1
            logger.warning(f"shutdown with work outstanding for client {client_id}, requesting abort")
        coordinator.on_abort_requested()
    return outstanding


def install_shutdown_handlers() -> None:
    """Register the app shutdown handler. Safe to call more than once."""
    global _installed
    if _installed:
        return
    _installed = True

    async def _abort_on_shutdown() -> None:
        abort_all()

    app.on_shutdown(_abort_on_shutdown)
    logger.info("shutdown handlers installed")
