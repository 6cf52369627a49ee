"""NFL pick'em scoring, tiebreaker and weekly awards engine."""
