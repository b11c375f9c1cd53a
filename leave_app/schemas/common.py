"""
Shared schema configuration: camelCase on the wire, snake_case in Python
"""
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

API_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)
