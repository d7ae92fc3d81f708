"""
Book catalog web application.

A set of small HTTP services over a single MongoDB collection of book
records: a JSON API (list, create, update, delete) under
``/api/books`` and server-rendered HTML views of the same data. Each
operation can run as its own service on a fixed port, or all of them
together in one process (see ``main.SERVICES``).
"""

__version__ = "1.0.0"
