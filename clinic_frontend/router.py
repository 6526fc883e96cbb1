from __future__ import annotations
from .models import Collection
from .screens import EntityScreen, screen_for


class ViewRouter:
    """Which of the three screens is showing.

    Selecting a view mounts a fresh screen, so an unsaved draft on the
    previous one is dropped, the same as leaving a page.
    """

    def __init__(self, active: Collection = Collection.PATIENTS):
        self.active = active
        self.screen: EntityScreen | None = None

    def select(self, view: Collection | str) -> EntityScreen:
        self.active = Collection(view)
        self.screen = screen_for(self.active)
        return self.screen

    async def activate(self, view: Collection | str) -> EntityScreen:
        screen = self.select(view)
        await screen.load()
        return screen

    async def current(self) -> EntityScreen:
        """The mounted screen, mounting and loading the active view on first use."""
        if self.screen is None:
            return await self.activate(self.active)
        return self.screen
