"""Pydantic models for the ingestion data flow."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SourceFile(BaseModel):
    """One input file handed to the analysis core."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    file_name: str
    content: str
    is_documentation: bool = False
