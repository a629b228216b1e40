"""Use cases for tally."""
