"""Users REST API.

A small FastAPI service exposing list/create/update operations over a single
``users`` table, with validation, duplicate-email detection and
password-stripped responses.
"""

__version__ = "0.1.0"
