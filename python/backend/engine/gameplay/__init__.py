from backend.engine.gameplay.game import GameStateMachine

__all__ = ["GameStateMachine"]
