"""Flight ticket report: minimum flight time per carrier and price statistics."""
