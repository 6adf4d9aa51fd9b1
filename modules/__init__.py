"""Page interaction modules and server-side helpers."""
