"""Static site build step for the content graph."""
