"""Domain base model and helpers"""

import uuid
from pydantic import BaseModel as PydanticBaseModel, ConfigDict


def generate_uuid() -> str:
    return str(uuid.uuid4())


class BaseModel(PydanticBaseModel):
    """Base for all domain entities"""

    model_config = ConfigDict(validate_assignment=True)
