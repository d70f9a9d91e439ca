"""
Base schema for the JSON API.

Fields are declared in snake_case and exchanged in camelCase (`bookIds`,
`reviewCount`, `isAdmin`); both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ORMCamelModel(CamelModel):
    """Output schema built from SQLAlchemy objects."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
