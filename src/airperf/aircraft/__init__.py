"""Aircraft type data (arms, limits, fuel figures)."""
