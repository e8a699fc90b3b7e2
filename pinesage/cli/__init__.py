"""PineSage command-line interface."""
