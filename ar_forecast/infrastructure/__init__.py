"""Infrastructure layer: file-backed repositories and gateways."""
