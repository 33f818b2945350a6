"""Node models for the Tana Input API.

A Tana node is a closed tagged union: the ``type`` key selects field nodes,
otherwise ``dataType`` selects the variant and a missing ``dataType`` means a
plain node. Every variant forbids unknown keys, so combinations the API does
not accept (a reference carrying children, a field node with a name) fail
validation instead of being sent upstream.

Reference: https://tana.inc/docs/input-api
"""

import base64
import binascii
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ..exceptions import TanaValidationError

# Vendor limit on top-level nodes per request
MAX_NODES_PER_REQUEST = 100

# Built-in Tana identifiers used when defining schema items
SCHEMA_NODE_ID = "SCHEMA"
SUPERTAG_SYSTEM_TAG = "SYS_T01"
FIELD_SYSTEM_TAG = "SYS_T02"

_url_adapter = TypeAdapter(AnyUrl)


class NodeValidationError(TanaValidationError):
    """Raised when a node or node tree does not match any Tana node variant."""

    pass


class SupertagRef(BaseModel):
    """A supertag applied to a node, with optional field values keyed by field id."""

    model_config = ConfigDict(extra="forbid")

    id: str
    fields: Optional[Dict[str, str]] = None


class _NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: ClassVar[str]


class _ContentNode(_NodeModel):
    """Shared attributes of every variant that can carry a name and children."""

    name: Optional[str] = None
    description: Optional[str] = None
    supertags: Optional[List[SupertagRef]] = None
    children: Optional[List["TanaNode"]] = None


class PlainNode(_ContentNode):
    kind: ClassVar[str] = "plain"

    data_type: Optional[Literal["plain"]] = Field(default=None, alias="dataType")


class ReferenceNode(_NodeModel):
    kind: ClassVar[str] = "reference"

    data_type: Literal["reference"] = Field(default="reference", alias="dataType")
    id: str


class DateNode(_ContentNode):
    kind: ClassVar[str] = "date"

    data_type: Literal["date"] = Field(default="date", alias="dataType")
    name: str

    @field_validator("name")
    @classmethod
    def _check_iso_date(cls, value: str) -> str:
        try:
            date.fromisoformat(value)
            return value
        except ValueError:
            pass
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO 8601 date")
        return value


class UrlNode(_ContentNode):
    kind: ClassVar[str] = "url"

    data_type: Literal["url"] = Field(default="url", alias="dataType")
    name: str

    @field_validator("name")
    @classmethod
    def _check_url(cls, value: str) -> str:
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError(f"'{value}' is not a valid URL")
        return value


class BooleanNode(_ContentNode):
    kind: ClassVar[str] = "boolean"

    data_type: Literal["boolean"] = Field(default="boolean", alias="dataType")
    name: str
    value: bool


class FileNode(_ContentNode):
    kind: ClassVar[str] = "file"

    data_type: Literal["file"] = Field(default="file", alias="dataType")
    file: str
    filename: str
    content_type: str = Field(alias="contentType")

    @field_validator("file")
    @classmethod
    def _check_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("file must be base64 encoded")
        return value


class FieldNode(_NodeModel):
    kind: ClassVar[str] = "field"

    type: Literal["field"] = "field"
    attribute_id: str = Field(alias="attributeId")
    children: Optional[List["TanaNode"]] = None


def _node_kind(value: Any) -> Optional[str]:
    """Select the variant for a raw dict or an already built node."""
    if isinstance(value, dict):
        if value.get("type") == "field":
            return "field"
        return value.get("dataType") or "plain"
    return getattr(value, "kind", None)


TanaNode = Annotated[
    Union[
        Annotated[PlainNode, Tag("plain")],
        Annotated[ReferenceNode, Tag("reference")],
        Annotated[DateNode, Tag("date")],
        Annotated[UrlNode, Tag("url")],
        Annotated[BooleanNode, Tag("boolean")],
        Annotated[FileNode, Tag("file")],
        Annotated[FieldNode, Tag("field")],
    ],
    Discriminator(_node_kind),
]

for _model in (_ContentNode, PlainNode, DateNode, UrlNode, BooleanNode, FileNode, FieldNode):
    _model.model_rebuild()

_node_adapter = TypeAdapter(TanaNode)
_node_list_adapter = TypeAdapter(List[TanaNode])


def _describe_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"Invalid node at '{location}': {first['msg']}"
    return f"Invalid node: {first['msg']}"


def parse_node(data: Any) -> "TanaNode":
    """Validate a weakly typed node tree and return the typed node.

    Raises:
        NodeValidationError: on the first node that matches no variant
    """
    try:
        return _node_adapter.validate_python(data)
    except ValidationError as e:
        raise NodeValidationError(_describe_error(e)) from e


def parse_nodes(data: Any) -> List["TanaNode"]:
    """Validate a sequence of node trees."""
    try:
        return _node_list_adapter.validate_python(data)
    except ValidationError as e:
        raise NodeValidationError(_describe_error(e)) from e


def node_to_payload(node: "TanaNode") -> Dict[str, Any]:
    """Serialize a node to the JSON shape the Input API expects."""
    return node.model_dump(by_alias=True, exclude_none=True)


class CreateNodesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_node_id: Optional[str] = Field(default=None, alias="targetNodeId")
    nodes: List[TanaNode]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SetNameRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_node_id: str = Field(alias="targetNodeId")
    set_name: str = Field(alias="setName")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class NodeResponse(BaseModel):
    """A node as echoed back by the Input API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    node_id: str = Field(alias="nodeId")
    name: Optional[str] = None
    description: Optional[str] = None
    children: Optional[List["NodeResponse"]] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class APIResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    children: List[NodeResponse] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
