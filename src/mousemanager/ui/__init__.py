"""Window-side integration for the mouse manager."""
