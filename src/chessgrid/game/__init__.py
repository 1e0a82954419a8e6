"""Game management layer — session, clock, collaborator interfaces.

Quick start::

    from chessgrid.core import parse_square
    from chessgrid.game import GameSession, TimeControl

    session = GameSession(time_control=TimeControl.blitz_5m())
    session.events.on_move.append(lambda record, text: print(text))
    session.apply_move(parse_square("e2"), parse_square("e4"))

The Qt bridge lives in :mod:`chessgrid.game.qt_bridge` and is imported
explicitly, so the session stays usable without a Qt application.
"""

from chessgrid.game.clock import CountdownClock, format_clock
from chessgrid.game.interfaces import IClock, PromotionChooser, TimeControl
from chessgrid.game.session import GameEvents, GameSession

__all__ = [
    # Interfaces
    "IClock",
    "PromotionChooser",
    "TimeControl",
    # Concrete
    "CountdownClock",
    "GameEvents",
    "GameSession",
    "format_clock",
]
