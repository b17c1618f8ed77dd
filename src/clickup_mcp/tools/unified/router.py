"""Action routing for unified tools.

Maps action names (and aliases) to handler callables. Handlers may be
plain functions or coroutine functions; :meth:`ActionRouter.dispatch`
awaits whatever the handler returns when it is awaitable.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from clickup_mcp.core.errors.execution import ActionRouterError


@dataclass(frozen=True)
class ActionDefinition:
    """A single routable action."""

    name: str
    handler: Callable[..., Any]
    summary: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)


class ActionRouter:
    """Dispatch table for one tool's actions."""

    def __init__(self, tool_name: str, actions: Sequence[ActionDefinition]) -> None:
        self.tool_name = tool_name
        self._actions: Dict[str, ActionDefinition] = {}
        self._lookup: Dict[str, ActionDefinition] = {}
        for definition in actions:
            key = definition.name.lower()
            if key in self._lookup:
                raise ValueError(f"Duplicate action '{definition.name}' for tool '{tool_name}'")
            self._actions[definition.name] = definition
            self._lookup[key] = definition
            for alias in definition.aliases:
                alias_key = alias.lower()
                if alias_key in self._lookup:
                    raise ValueError(f"Duplicate alias '{alias}' for tool '{tool_name}'")
                self._lookup[alias_key] = definition

    def allowed_actions(self) -> List[str]:
        """Canonical action names, in registration order."""
        return list(self._actions)

    def describe(self) -> Dict[str, str]:
        return {name: definition.summary for name, definition in self._actions.items()}

    def resolve(self, action: str) -> ActionDefinition:
        definition = self._lookup.get((action or "").strip().lower())
        if definition is None:
            raise ActionRouterError(
                f"Unsupported {self.tool_name} action '{action}'",
                allowed_actions=self.allowed_actions(),
            )
        return definition

    async def dispatch(self, action: str, **kwargs: Any) -> Any:
        """Run the handler registered for *action*.

        Raises:
            ActionRouterError: *action* is not registered.
        """
        definition = self.resolve(action)
        result = definition.handler(**kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
