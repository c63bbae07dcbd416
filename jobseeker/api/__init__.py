"""HTTP API for JobSeeker."""
