"""Main layer: settings, dependency container and command line entry point."""
