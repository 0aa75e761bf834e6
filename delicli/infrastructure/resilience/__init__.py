"""API Resilience Implementations.

Contains the request throttle and the executor that retries empty
responses and fails fast on throttling status codes.
Bounded Context: API Resilience
"""
