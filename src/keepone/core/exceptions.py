"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Errors raised by the grouping and resolution core.
Neither is transient: the caller fixes its input or re-scans.
"""


class InvalidInputError(ValueError):
    """A file descriptor is missing its size or modification time."""


class InvalidGroupError(ValueError):
    """A duplicate group handed to the resolver has fewer than two files."""
