"""
Effect Hooks - Lifecycle events and the effect dispatch table.

Cards never call engine internals directly. Instead a card template
declares effect tags ("Creature", "Suicide", ...) and each tag is bound
to one or more lifecycle events in a global dispatch table:

    effects = EffectRegistry()
    SUICIDE = effects.effect("Suicide")

    @effects.on(SUICIDE, LifecycleEvent.ON_AFTER_COMBAT)
    def _destroy_self(card, match, hook):
        ...

Tags are resolved into EffectBindings when a template is built, so an
unknown tag fails at catalog construction, never mid-match.

At runtime the EffectDispatcher fires an event for a list of cards:
- Synchronously, in zone order (insertion order)
- Handlers may mutate the match, but must move cards via zones.move_card
- Cards that left the expected zone before their turn are skipped

HookBus provides the before/after extension slot: ordered listeners per
event with explicit registration and removal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, TYPE_CHECKING
import logging

from .errors import UnknownEffect

if TYPE_CHECKING:
    from .state import CardInstance, MatchState, ZoneType


logger = logging.getLogger(__name__)


class LifecycleEvent(Enum):
    """Points in the turn/zone lifecycle where effects fire."""
    ON_ENTER_BATTLE_ZONE = "onEnterBattleZone"
    ON_LEAVE_BATTLE_ZONE = "onLeaveBattleZone"
    ON_START_OF_TURN = "onStartOfTurn"
    ON_AFTER_COMBAT = "onAfterCombat"
    ON_BEFORE_ATTACK = "onBeforeAttack"


Handler = Callable[["CardInstance", "MatchState", "HookContext"], None]
Listener = Callable[["MatchState", "HookContext"], None]


@dataclass(frozen=True)
class EffectBinding:
    """A resolved (effect tag, event, handler) triple on a card template."""
    effect: str
    event: LifecycleEvent
    handler: Handler


@dataclass
class HookContext:
    """
    Context passed to handlers and listeners.

    `effects` is the dispatcher that fired the event; handlers pass it
    back to zones.move_card so nested moves fire their own hooks.
    """
    event: LifecycleEvent
    effects: EffectDispatcher
    card: CardInstance | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class EffectRegistry:
    """
    Global dispatch table: effect tag -> [(event, handler)].

    Built once at process start. A tag may be declared with no bindings
    (e.g. "Spell"); it still resolves.
    """

    def __init__(self):
        self._bindings: dict[str, list[tuple[LifecycleEvent, Handler]]] = {}

    def effect(self, name: str) -> str:
        """Declare an effect tag. Returns the tag for use in card factories."""
        self._bindings.setdefault(name, [])
        return name

    def bind(self, name: str, event: LifecycleEvent, handler: Handler) -> None:
        """Bind a handler to an event for a tag, declaring the tag if needed."""
        self._bindings.setdefault(name, []).append((event, handler))

    def on(self, name: str, event: LifecycleEvent) -> Callable[[Handler], Handler]:
        """Decorator form of bind()."""
        def decorator(handler: Handler) -> Handler:
            self.bind(name, event, handler)
            return handler
        return decorator

    def has_effect(self, name: str) -> bool:
        return name in self._bindings

    @property
    def effect_names(self) -> list[str]:
        return list(self._bindings)

    def resolve(self, effects: Iterable[str], card_id: str | None = None) -> tuple[EffectBinding, ...]:
        """
        Resolve effect tags into bindings, in tag order then binding order.

        Raises UnknownEffect for an undeclared tag.
        """
        resolved: list[EffectBinding] = []
        for name in effects:
            if name not in self._bindings:
                raise UnknownEffect(name, card_id)
            for event, handler in self._bindings[name]:
                resolved.append(EffectBinding(effect=name, event=event, handler=handler))
        return tuple(resolved)

    def dispatch_table(self) -> dict[LifecycleEvent, list[tuple[str, Handler]]]:
        """The table viewed by event key: event -> [(tag, handler)]."""
        table: dict[LifecycleEvent, list[tuple[str, Handler]]] = {e: [] for e in LifecycleEvent}
        for name, bindings in self._bindings.items():
            for event, handler in bindings:
                table[event].append((name, handler))
        return table


class HookBus:
    """
    Ordered before/after listeners per lifecycle event.

    Listeners observe an event around the card handlers; they are
    registered and removed explicitly, never emitted ambiently.
    """

    WHEN = ("before", "after")

    def __init__(self):
        self._listeners: dict[tuple[str, LifecycleEvent], list[Listener]] = {}

    def add_listener(self, event: LifecycleEvent, listener: Listener, when: str = "after") -> None:
        if when not in self.WHEN:
            raise ValueError(f"when must be one of {self.WHEN}, got {when!r}")
        self._listeners.setdefault((when, event), []).append(listener)

    def remove_listener(self, event: LifecycleEvent, listener: Listener, when: str = "after") -> bool:
        """Remove a listener. Returns False if it was not registered."""
        listeners = self._listeners.get((when, event), [])
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def listeners(self, event: LifecycleEvent, when: str = "after") -> list[Listener]:
        return list(self._listeners.get((when, event), []))

    def run(self, when: str, match: MatchState, hook: HookContext) -> None:
        for listener in self.listeners(hook.event, when):
            listener(match, hook)


class EffectDispatcher:
    """
    Fires lifecycle events for cards.

    Stateless apart from the HookBus; the same dispatcher may serve
    many matches.
    """

    def __init__(self, hooks: HookBus | None = None):
        self.hooks = hooks or HookBus()

    def fire(
        self,
        match: MatchState,
        event: LifecycleEvent,
        cards: Iterable[CardInstance],
        zone: ZoneType | None = None,
        **data: Any,
    ) -> int:
        """
        Run every handler bound to `event` for each card, in order.

        If `zone` is given, a card that is no longer in that zone when its
        turn comes (moved by an earlier handler) is skipped.

        Returns the number of handlers run.
        """
        eligible = list(cards)
        outer = HookContext(event=event, effects=self, data=dict(data))
        self.hooks.run("before", match, outer)

        ran = 0
        for card in eligible:
            if zone is not None and card.zone != zone:
                continue
            for binding in card.template.bindings:
                if binding.event is not event:
                    continue
                logger.debug(
                    "%s: %s on %s (%s)", match.match_id, event.value, card.name, binding.effect
                )
                binding.handler(card, match, HookContext(event=event, effects=self, card=card, data=dict(data)))
                ran += 1

        self.hooks.run("after", match, outer)
        return ran
