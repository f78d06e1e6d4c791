"""YouTube snapshots: id extraction, thumbnails and segment fallback."""
