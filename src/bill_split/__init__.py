"""Split a shared electricity bill between two occupants."""
