"""Runtime configuration, pipeline and command-line interface."""
