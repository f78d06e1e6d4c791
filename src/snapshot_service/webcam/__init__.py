"""Webcam / live-stream snapshots."""
