"""Domain Layer: value objects, envelopes, events and ports for the Delicious API."""
