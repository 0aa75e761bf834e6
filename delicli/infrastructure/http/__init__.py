"""URL construction for Delicious API and feed endpoints."""
