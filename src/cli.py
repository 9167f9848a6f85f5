"""Interactive loop for the ticket viewer.

Each cycle renders the session, blocks for one key and dispatches it.
Errors from rendering or reading are not handled here; they unwind to the
caller, whose terminal context restores the screen.
"""
from __future__ import annotations
import logging

import keys
from keys import KeySource
from presenter import Presenter
from session import Session

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({'q', keys.ESC})
DOWN_KEYS = frozenset({'j', keys.DOWN})
UP_KEYS = frozenset({'k', keys.UP})
EDIT_KEYS = frozenset({'l'})
BACK_KEYS = frozenset({'s'})


class CLI:
    def __init__(self, session: Session, presenter: Presenter, key_source: KeySource):
        self.session: Session = session
        self.presenter: Presenter = presenter
        self.key_source: KeySource = key_source

    def run(self) -> None:
        """Main loop; returns once a quit key is read or input ends."""
        logger.info("Session started: %s", self.session)
        while True:
            self.presenter.draw(self.session.render_state())
            key = self.key_source.read_key()
            if not key:
                logger.info("Input closed, leaving session")
                break
            if self.handle_key(key):
                break
        logger.info("Session finished: %s", self.session)

    # -------------------- key dispatch --------------------
    def handle_key(self, key: str) -> bool:
        """Apply one key to the session. Returns True when the loop should stop."""
        if key in QUIT_KEYS:
            return True
        if key in DOWN_KEYS:
            self.session.next_row()
        elif key in UP_KEYS:
            self.session.previous_row()
        elif key in EDIT_KEYS:
            self.session.enter_edit_mode()
        elif key in BACK_KEYS:
            self.session.leave_edit_mode()
        return False
