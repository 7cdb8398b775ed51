"""Sky color service: time of day and weather to status bar colors."""
