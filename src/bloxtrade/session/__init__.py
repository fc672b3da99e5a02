from bloxtrade.session.state import Identity, SessionState

__all__ = ["Identity", "SessionState"]
