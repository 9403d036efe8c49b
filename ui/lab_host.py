import logging
from typing import Callable, Optional

from nicegui import ui

logger = logging.getLogger(__name__)

Teardown = Callable[[], None]


class LabHost:
    """
    Owns the content column and the teardown of whichever lab is on screen.
    Labs never register client handlers themselves: the host hooks session
    end once per client and always tears down the CURRENT lab only.
    """

    def __init__(self, content=None):
        self.content = content
        self.active_teardown: Optional[Teardown] = None
        self._attached = set()

    def attach(self, client):
        """Real session end only; on_disconnect also fires on a reconnect."""
        if client.id in self._attached:
            return
        self._attached.add(client.id)
        client.on_delete(self.teardown)

    def teardown(self):
        teardown, self.active_teardown = self.active_teardown, None
        if teardown:
            teardown()

    def switch(self, build: Callable[[], Optional[Teardown]]):
        self.teardown()
        self.content.clear()
        try:
            with self.content:
                self.active_teardown = build()
        except Exception as e:
            ui.notify(f"Error loading module: {str(e)}", type='negative')
            logger.exception("Lab failed to load")
            with self.content:
                ui.label("CRASH DETECTED IN MODULE").classes('text-red-500 text-2xl font-bold')
                ui.label(f"{str(e)}").classes('text-red-400')
                ui.label("Check server logs for details.").classes('text-slate-500')
