"""Self-healing stopwatch: one running timer per (user, device) slot."""
