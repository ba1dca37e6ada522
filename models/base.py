"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all request/response schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects and dataclasses (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class RecordSchema(BaseModel):
    """
    Base for stored records.

    Same as BaseSchema except strings are kept exactly as received,
    so spreadsheet text lands in the store untouched.
    """
    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True
    )
