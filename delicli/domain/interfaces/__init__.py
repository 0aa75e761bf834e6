"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that the facade and the
CLI front end are written against.
"""
