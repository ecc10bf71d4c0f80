"""TimeOS: stopwatch-style time tracking against client companies."""
