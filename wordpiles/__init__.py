"""Word piles: a column-stack word puzzle engine."""
