"""Admin console core for the exercise catalog."""
