"""shtable command line interface."""
