from backend.engine.gameinput.validator import InputValidator, SubmitResult

__all__ = ["InputValidator", "SubmitResult"]
