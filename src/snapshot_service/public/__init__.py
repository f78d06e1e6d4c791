"""Public-facing HTTP concerns: CORS and the landing page."""
