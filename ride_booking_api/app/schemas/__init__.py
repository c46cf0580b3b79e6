"""
Pydantic schema definitions for API responses.

Each endpoint returns an explicit output record wrapped in the common
``SuccessResponse`` envelope.  Field names are snake_case in Python and
serialised with the camelCase spelling used by the database columns
and by existing clients.
"""
