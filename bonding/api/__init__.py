"""HTTP service for the bonding curve market."""
