"""Core primitives: accumulator, checkpoint types, channels, cancellation."""
