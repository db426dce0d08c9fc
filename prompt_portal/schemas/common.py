# prompt_portal/schemas/common.py

from datetime import datetime, timezone

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Annotated


def _as_utc(value: datetime) -> datetime:
    # naive timestamps in storage are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Base for records exchanged with the browser client and persisted as JSON.

    Fields are snake_case in Python and camelCase on the wire and in storage.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ResponseModel(CamelModel):
    success: bool = True


class ErrorResponseModel(CamelModel):
    success: bool = False
    error: str
