"""
HGS Command Layer — Command Bus
==================================
Request/response front door for embedding callers.

Flow:
    1. Look up the engine handler for command.command_type
    2. Execute it
    3. GovernanceError → REJECTED outcome carrying the reason
    4. Otherwise → ACCEPTED outcome carrying the return value as .result

The CommandBus:
- Routes, does not decide (authorization lives in the engines)
- Never swallows anything other than GovernanceError
- Guarantees exactly one outcome per handled command

The CommandBus does NOT:
- Touch engine state directly
- Emit events (engines emit on success only)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from core.commands.base import Command
from core.commands.errors import GovernanceError
from core.commands.outcomes import CommandOutcome
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("hgs.commands")


# ══════════════════════════════════════════════════════════════
# ENGINE HANDLER PROTOCOL
# ══════════════════════════════════════════════════════════════

class EngineHandlerProtocol(Protocol):
    """
    Each engine registers a handler that knows how to turn a
    command into a call on its service.

    The handler raises GovernanceError subclasses on rejection
    and returns the operation's return value otherwise.
    """

    def execute(self, command: Command) -> Any:
        ...


# ══════════════════════════════════════════════════════════════
# COMMAND BUS ERRORS
# ══════════════════════════════════════════════════════════════

class CommandBusError(Exception):
    """Base error for command bus operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine handler registered for "
            f"command type '{command_type}'."
        )


# ══════════════════════════════════════════════════════════════
# COMMAND BUS
# ══════════════════════════════════════════════════════════════

class CommandBus:
    """
    Usage:
        bus = CommandBus()
        bus.register_handler("maintenance.work.announce.request", handler)

        result = bus.handle(command)
        if result.is_rejected:
            print(result.reason.code, result.reason.message)
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock if clock is not None else SystemClock()
        self._handlers: Dict[str, Any] = {}

    # ══════════════════════════════════════════════════════════
    # HANDLER REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register_handler(
        self,
        command_type: str,
        handler: Any,
    ) -> None:
        """
        Register engine handler for a command type.

        Handler must implement EngineHandlerProtocol (have .execute()).
        """
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")

        self._handlers[command_type] = handler
        logger.debug(f"Handler registered: {command_type}")

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._handlers

    @property
    def command_types(self) -> frozenset:
        return frozenset(self._handlers)

    # ══════════════════════════════════════════════════════════
    # HANDLE
    # ══════════════════════════════════════════════════════════

    def handle(self, command: Command) -> CommandOutcome:
        """
        Execute a command and answer it with exactly one outcome.

        Raises:
            NoHandlerRegistered: command_type has no engine handler.
        """
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        try:
            result = handler.execute(command)
        except GovernanceError as exc:
            logger.info(
                f"Command {command.command_id} ({command.command_type}) "
                f"from {command.caller} rejected by "
                f"'{exc.reason.policy_name}': "
                f"[{exc.reason.code}] {exc.reason.message}"
            )
            return CommandOutcome.rejected(
                command, self._clock.now_utc(), exc.reason,
            )

        logger.info(
            f"Command {command.command_id} ({command.command_type}) "
            f"from {command.caller} ACCEPTED"
        )
        return CommandOutcome.accepted(command, self._clock.now_utc(), result)
