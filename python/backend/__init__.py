"""Game logic core for Memory Master."""
