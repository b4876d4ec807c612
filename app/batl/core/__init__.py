"""Core services for batl: root resolution, config I/O, location, and resources."""
