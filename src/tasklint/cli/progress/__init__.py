"""Terminal progress displays."""
