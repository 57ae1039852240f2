"""
Shared base model for API payloads.

Attributes are declared in snake case and exposed on the wire in camel
case (``serviceType``, ``isActive``, ``sessionId``) so that browser
clients can consume the JSON directly.  Both spellings are accepted on
input.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
