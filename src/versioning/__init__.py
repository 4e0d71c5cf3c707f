"""Version ordering for supported ecosystems."""
