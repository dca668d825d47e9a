"""HTTP API for Quizboard."""
