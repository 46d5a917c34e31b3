from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (what the browser client sends and reads)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
