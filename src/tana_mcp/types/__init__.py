"""Type definitions for Tana MCP server."""

from .nodes import (
    FIELD_SYSTEM_TAG,
    MAX_NODES_PER_REQUEST,
    SCHEMA_NODE_ID,
    SUPERTAG_SYSTEM_TAG,
    APIResponse,
    BooleanNode,
    CreateNodesRequest,
    DateNode,
    FieldNode,
    FileNode,
    NodeResponse,
    NodeValidationError,
    PlainNode,
    ReferenceNode,
    SetNameRequest,
    SupertagRef,
    TanaNode,
    UrlNode,
    node_to_payload,
    parse_node,
    parse_nodes,
)

__all__ = [
    "FIELD_SYSTEM_TAG",
    "MAX_NODES_PER_REQUEST",
    "SCHEMA_NODE_ID",
    "SUPERTAG_SYSTEM_TAG",
    "APIResponse",
    "BooleanNode",
    "CreateNodesRequest",
    "DateNode",
    "FieldNode",
    "FileNode",
    "NodeResponse",
    "NodeValidationError",
    "PlainNode",
    "ReferenceNode",
    "SetNameRequest",
    "SupertagRef",
    "TanaNode",
    "UrlNode",
    "node_to_payload",
    "parse_node",
    "parse_nodes",
]
