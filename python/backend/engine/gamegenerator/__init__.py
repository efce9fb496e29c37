from backend.engine.gamegenerator.generator import RandomSource, SequenceEngine

__all__ = ["RandomSource", "SequenceEngine"]
