"""Core wiring: ports (Protocols) and the application state container."""
