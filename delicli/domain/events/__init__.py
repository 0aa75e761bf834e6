"""Domain Event definitions.

Represents significant occurrences during a request's lifecycle
(deferral, retry, success, failure).
"""
