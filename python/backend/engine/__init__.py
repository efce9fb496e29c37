"""Game-sequence state machine and its components."""
