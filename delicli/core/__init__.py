"""Core Application Layer: the operation facade, exceptions and command handler."""
