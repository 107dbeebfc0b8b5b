"""Client-side sentiment analysis workflow."""
