"""Version 1 of the Person API."""
