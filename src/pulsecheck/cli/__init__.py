"""pulsecheck command-line interface."""
