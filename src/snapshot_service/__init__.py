"""Snapshot service: JPEG and GIF captures from live streams and YouTube."""
