"""Content index, update dispatch and ranked search."""
