"""Daily rotating background photos."""
