"""Test package for the club portal."""
