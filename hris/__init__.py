"""Async client and view controllers for the HRIS REST API."""

__version__ = "1.0.0"
