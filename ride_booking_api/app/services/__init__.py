"""
Service layer.

Each service takes the application's SQLAlchemy engine, checks its
input, then opens a connection, runs parameterised SQL and maps the
rows to the pydantic records in ``schemas``.  Services know nothing
about HTTP; they raise the exceptions from ``core.exceptions`` instead.
"""
