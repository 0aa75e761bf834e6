"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the client to the outside world (HTTP transport, XML/JSON
parsing, configuration files, console output).
"""
