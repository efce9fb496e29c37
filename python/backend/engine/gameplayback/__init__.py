from backend.engine.gameplayback.playback import PlaybackController

__all__ = ["PlaybackController"]
