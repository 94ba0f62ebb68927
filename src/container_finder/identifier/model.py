# src/container_finder/identifier/model.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from container_finder.identifier.constants import TABLES_VERSION


class ContainerResult(BaseModel):
    """
    Description of the element that most likely wraps a single product.
    Serialized with camelCase keys (tagName, className, ...) via by_alias=True.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tag_name: str
    class_name: str
    selector: str
    count: int = Field(ge=1)
    confidence: float = Field(ge=0.0, le=1.0)


class IdentificationTrace(BaseModel):
    """
    Intermediate state of one identification run, for debugging and tests.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    candidate_count: int = 0
    # Signature -> number of candidates, the no-class bucket included
    class_counts: Dict[str, int] = Field(default_factory=dict)
    # Repeated signatures, best first
    common_classes: List[str] = Field(default_factory=list)
    used_fallback: bool = False
    selected_count: int = 0
    tables_version: str = TABLES_VERSION
    result: Optional[ContainerResult] = None
