"""Infrastructure: configuration, dependency wiring, logging and entrypoint."""
