"""Test calendar feed generator and dev tooling for the zj-cal plugin."""
