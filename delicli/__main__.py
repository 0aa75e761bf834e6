"""Main entry point when executing delicli as a package.

This allows running the package using python -m delicli.
"""

from delicli.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
