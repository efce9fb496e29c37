from backend.engine.gamestate.state import GamePhase, GameSession, RoundState

__all__ = ["GamePhase", "GameSession", "RoundState"]
