"""Storage infrastructure: Drive client and record store implementations."""
