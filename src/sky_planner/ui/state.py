"""Shared UI state and lightweight app metadata."""

from dataclasses import dataclass, field
from typing import Callable

from sky_planner.models.build import LegacyBuild, default_build


@dataclass(slots=True)
class UiState:
    """Top-level app state used by controllers.

    ``build`` is a snapshot: editors hand in a new build through
    ``set_build`` instead of changing the current one.
    """

    build: LegacyBuild = field(default_factory=default_build)
    listeners: list[Callable[[LegacyBuild], None]] = field(default_factory=list)

    def set_build(self, build: LegacyBuild) -> None:
        self.build = build
        for listener in list(self.listeners):
            listener(build)

    def reset_build(self) -> None:
        self.set_build(default_build())

    def subscribe(self, listener: Callable[[LegacyBuild], None]) -> Callable[[], None]:
        """Call ``listener`` on every build change; returns an unsubscribe hook."""
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe
