"""
schemas/base.py
---------------
Shared Pydantic base for every request/response model.

Wire names are camelCase (organizationId, fiscalYearEnd, ...) while Python
attributes stay snake_case. Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
