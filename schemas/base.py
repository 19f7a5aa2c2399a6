from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# Wire format is camelCase (what the mobile client sends and reads);
# snake_case field names are still accepted on input.
class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Message(BaseModel):
    message: str
