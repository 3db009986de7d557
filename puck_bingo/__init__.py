"""Hockey bingo engine: generate, evaluate and score 3x3 prediction tickets."""
