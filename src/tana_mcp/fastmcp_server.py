"""FastMCP-based Tana MCP Server Implementation.

📝 CREATING NODES:
- create_plain_node(name, description, supertags, targetNodeId) - Create a plain text node ⭐ MAIN FUNCTION FOR SIMPLE NODES!
- create_reference_node(referenceId, targetNodeId) - Reference an existing node
- create_date_node(date, description, supertags, targetNodeId) - Create a date node (ISO 8601)
- create_url_node(url, description, supertags, targetNodeId) - Create a URL node
- create_checkbox_node(name, checked, description, supertags, targetNodeId) - Create a checkbox node
- create_file_node(fileData, filename, contentType, description, supertags, targetNodeId) - Attach a file
- create_field_node(attributeId, children, targetNodeId) - Set a field value on a node
- create_node_structure(node, targetNodeId) - Create a whole node tree in one request ⭐ MAIN FUNCTION FOR NESTED CONTENT!

✏️ EDITING NODES:
- set_node_name(nodeId, newName) - Rename an existing node

🏷️ SCHEMA:
- create_supertag(name, description, targetNodeId) - Define a new supertag
- create_field(name, description, targetNodeId) - Define a new field

Tool argument names follow the Tana Input API's camelCase keys.
"""

import json
import logging
import sys
from functools import wraps
from typing import Annotated, Any, Callable, Dict, List, Optional, TypeVar, Union

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from tana_mcp import __version__
from tana_mcp.client import TanaClient
from tana_mcp.config import ConfigError, TanaMCPConfig
from tana_mcp.content import (
    API_OVERVIEW,
    NODE_TYPES,
    USAGE_EXAMPLES,
    build_knowledge_entry_prompt,
    build_meeting_notes_prompt,
    build_project_prompt,
    build_task_prompt,
)
from tana_mcp.exceptions import TanaValidationError
from tana_mcp.types import (
    FIELD_SYSTEM_TAG,
    SCHEMA_NODE_ID,
    SUPERTAG_SYSTEM_TAG,
    BooleanNode,
    DateNode,
    FieldNode,
    FileNode,
    NodeResponse,
    PlainNode,
    ReferenceNode,
    SupertagRef,
    TanaNode,
    UrlNode,
    parse_node,
    parse_nodes,
)

# Configure logging
logger = logging.getLogger(__name__)

SERVER_NAME = "Tana MCP Server"

# Create FastMCP server instance
mcp = FastMCP(SERVER_NAME)

# Type for generic functions
T = TypeVar("T")

# Runtime config, set by main()
_config: Optional[TanaMCPConfig] = None


def _load_module_config() -> TanaMCPConfig:
    """Load configuration at module level for tool registration filtering."""
    try:
        return TanaMCPConfig.load()
    except ConfigError as e:
        logger.warning(f"Failed to load configuration file: {e}. Using environment only.")
        return TanaMCPConfig.from_environment()


# Load config for tool registration filtering
_module_config = _load_module_config()


def get_config() -> TanaMCPConfig:
    return _config or _module_config


# === UTILITY FUNCTIONS ===

def get_tana_client() -> TanaClient:
    """Get a configured Tana client instance."""
    config = get_config()
    if not config.api_token:
        raise TanaValidationError("TANA_API_TOKEN environment variable is required")
    return TanaClient(config)


def validate_required_param(value: str, param_name: str) -> str:
    """Validate that a parameter is provided and not empty."""
    if not value or not value.strip():
        raise TanaValidationError(f"{param_name} parameter is required and cannot be empty")
    return value.strip()


def format_result(result: Union[NodeResponse, List[NodeResponse]]) -> str:
    """Render a Tana response as pretty-printed JSON."""
    if isinstance(result, list):
        data: Any = [item.to_dict() for item in result]
    else:
        data = result.to_dict()
    return json.dumps(data, indent=2, ensure_ascii=False)


async def _create_and_format(target_node_id: Optional[str], node: TanaNode) -> str:
    client = get_tana_client()
    result = await client.create_node(target_node_id, node)
    return format_result(result)


def with_client_error_handling(operation_name: str):
    """Decorator turning every failure into a tool error the caller can read."""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except ToolError:
                raise
            except Exception as e:
                logger.warning(f"{operation_name} failed: {e}")
                raise ToolError(f"{operation_name} failed: {e}") from e
        return wrapper
    return decorator


def conditional_tool(tool_name: str):
    """Decorator to conditionally register tools based on configuration."""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        if _module_config.is_tool_enabled(tool_name):
            mcp.tool(name=tool_name)(func)
        else:
            logger.info(f"Tool '{tool_name}' disabled in configuration - not registering")
        return func
    return decorator


def unregister_disabled_tools(config: TanaMCPConfig) -> List[str]:
    """Remove tools that the runtime configuration disables.

    Registration happens at import time against the module-level config, so a
    config file given to ``main`` can only take tools away afterwards.
    """
    removed = []
    for tool_name in config.get_disabled_tools():
        if tool_name in mcp._tool_manager._tools:
            mcp.remove_tool(tool_name)
            removed.append(tool_name)
            logger.info(f"Tool '{tool_name}' disabled in runtime configuration - unregistered")
    return removed


def create_tool(tool_name: str, operation_name: str):
    """Create a tool decorator with consistent error handling."""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        return conditional_tool(tool_name)(
            with_client_error_handling(operation_name)(func)
        )
    return decorator


# Shared argument descriptions
TargetNodeId = Annotated[
    Optional[str],
    Field(description="ID of the node to add the new node under. Omit to add to the Library; 'INBOX' adds to the Inbox."),
]
Description = Annotated[Optional[str], Field(description="Optional description shown under the node name.")]
Supertags = Annotated[
    Optional[List[SupertagRef]],
    Field(description="Supertags to apply, each with an 'id' and optional 'fields' mapping field ids to values."),
]


# === NODE CREATION ===

@create_tool("create_plain_node", "Create plain node")
async def create_plain_node(
    name: Annotated[str, Field(description="Name (text) of the node. Example: 'Call the dentist'")],
    description: Description = None,
    supertags: Supertags = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a plain text node in Tana.

    Returns:
        str: JSON of the created node including the nodeId Tana assigned.
    """
    node = PlainNode(name=name, description=description, supertags=supertags)
    return await _create_and_format(targetNodeId, node)


@create_tool("create_reference_node", "Create reference node")
async def create_reference_node(
    referenceId: Annotated[str, Field(description="ID of the existing node to reference.")],
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a node that references another node in Tana."""
    referenceId = validate_required_param(referenceId, "referenceId")
    node = ReferenceNode(id=referenceId)
    return await _create_and_format(targetNodeId, node)


@create_tool("create_date_node", "Create date node")
async def create_date_node(
    date: Annotated[str, Field(description="ISO 8601 date or date-time. Example: '2024-01-15'")],
    description: Description = None,
    supertags: Supertags = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a date node in Tana. The date becomes the node name."""
    node = DateNode(name=date, description=description, supertags=supertags)
    return await _create_and_format(targetNodeId, node)


@create_tool("create_url_node", "Create URL node")
async def create_url_node(
    url: Annotated[str, Field(description="Absolute URL. Example: 'https://tana.inc'")],
    description: Description = None,
    supertags: Supertags = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a URL node in Tana. The URL must be valid and becomes the node name."""
    node = UrlNode(name=url, description=description, supertags=supertags)
    return await _create_and_format(targetNodeId, node)


@create_tool("create_checkbox_node", "Create checkbox node")
async def create_checkbox_node(
    name: Annotated[str, Field(description="Name of the checkbox node. Example: 'Write report'")],
    checked: Annotated[bool, Field(description="Whether the checkbox is checked.")],
    description: Description = None,
    supertags: Supertags = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a checkbox (boolean) node in Tana."""
    node = BooleanNode(name=name, value=checked, description=description, supertags=supertags)
    return await _create_and_format(targetNodeId, node)


@create_tool("create_file_node", "Create file node")
async def create_file_node(
    fileData: Annotated[str, Field(description="Base64 encoded file contents.")],
    filename: Annotated[str, Field(description="File name. Example: 'report.pdf'")],
    contentType: Annotated[str, Field(description="MIME type. Example: 'application/pdf'")],
    description: Description = None,
    supertags: Supertags = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Upload a file as a file node in Tana."""
    node = FileNode(
        file=fileData,
        filename=filename,
        content_type=contentType,
        description=description,
        supertags=supertags,
    )
    return await _create_and_format(targetNodeId, node)


@create_tool("create_field_node", "Create field node")
async def create_field_node(
    attributeId: Annotated[str, Field(description="ID of the field definition (attribute).")],
    children: Annotated[
        Optional[List[Dict[str, Any]]],
        Field(description="Field values as nodes, in order. Example: [{'name': 'High'}]"),
    ] = None,
    targetNodeId: TargetNodeId = None,
) -> str:
    """Set a field value on a node by creating a field node under it."""
    attributeId = validate_required_param(attributeId, "attributeId")
    node = FieldNode(
        attribute_id=attributeId,
        children=parse_nodes(children) if children is not None else None,
    )
    return await _create_and_format(targetNodeId, node)


@create_tool("create_node_structure", "Create node structure")
async def create_node_structure(
    node: Annotated[
        Dict[str, Any],
        Field(description="A node with optional nested 'children'. Any node type may appear at any depth; see tana://api/node-types."),
    ],
    targetNodeId: TargetNodeId = None,
) -> str:
    """Create a node tree in a single request.

    Every node in the tree is validated against the Tana node types before
    anything is sent; the first invalid node is reported with its location.
    """
    return await _create_and_format(targetNodeId, parse_node(node))


# === NODE EDITING ===

@create_tool("set_node_name", "Set node name")
async def set_node_name(
    nodeId: Annotated[str, Field(description="ID of the node to rename.")],
    newName: Annotated[str, Field(description="New name for the node.")],
) -> str:
    """Rename an existing node in Tana.

    Tana does not always echo the renamed node; in that case the result holds
    only the nodeId.
    """
    nodeId = validate_required_param(nodeId, "nodeId")
    client = get_tana_client()
    result = await client.set_node_name(nodeId, newName)
    return format_result(result)


# === SCHEMA ===

@create_tool("create_supertag", "Create supertag")
async def create_supertag(
    name: Annotated[str, Field(description="Name of the new supertag. Example: 'meeting'")],
    description: Description = None,
    targetNodeId: Annotated[
        Optional[str], Field(description="Where to create the supertag. Defaults to the workspace schema.")
    ] = SCHEMA_NODE_ID,
) -> str:
    """Define a new supertag in the workspace schema."""
    node = PlainNode(
        name=name,
        description=description,
        supertags=[SupertagRef(id=SUPERTAG_SYSTEM_TAG)],
    )
    return await _create_and_format(targetNodeId or SCHEMA_NODE_ID, node)


@create_tool("create_field", "Create field")
async def create_field(
    name: Annotated[str, Field(description="Name of the new field. Example: 'Attendees'")],
    description: Description = None,
    targetNodeId: Annotated[
        Optional[str], Field(description="Where to create the field. Defaults to the workspace schema.")
    ] = SCHEMA_NODE_ID,
) -> str:
    """Define a new field in the workspace schema."""
    node = PlainNode(
        name=name,
        description=description,
        supertags=[SupertagRef(id=FIELD_SYSTEM_TAG)],
    )
    return await _create_and_format(targetNodeId or SCHEMA_NODE_ID, node)


# === RESOURCES ===

@mcp.resource(
    "tana://api/overview",
    name="api_overview",
    description="Overview of the Tana Input API",
    mime_type="text/markdown",
)
def get_api_overview() -> str:
    return API_OVERVIEW


@mcp.resource(
    "tana://api/node-types",
    name="node_types",
    description="Reference of every Tana node type and its fields",
    mime_type="text/markdown",
)
def get_node_types() -> str:
    return NODE_TYPES


@mcp.resource(
    "tana://api/examples",
    name="usage_examples",
    description="Common patterns for using the Tana tools",
    mime_type="text/markdown",
)
def get_usage_examples() -> str:
    return USAGE_EXAMPLES


@mcp.resource(
    "tana://server/info",
    name="server_info",
    description="Current server configuration and registered capabilities",
    mime_type="application/json",
)
async def get_server_info() -> str:
    """Get Tana MCP server information."""
    config = get_config()
    tools = await mcp.get_tools()
    prompts = await mcp.get_prompts()
    resources = await mcp.get_resources()
    info = {
        "name": SERVER_NAME,
        "version": __version__,
        "endpoint": config.endpoint,
        "api_token_configured": bool(config.api_token),
        "tools": len(tools),
        "prompts": len(prompts),
        "resources": len(resources),
        "disabled_tools": config.get_disabled_tools(),
    }
    return json.dumps(info, indent=2)


# === PROMPTS ===

@mcp.prompt(name="create_task", description="Create a task in Tana")
def create_task_prompt(
    title: Optional[str] = None,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    return build_task_prompt(title, description, due_date, priority, tags, target_node_id)


@mcp.prompt(name="create_project", description="Create a project with tasks in Tana")
def create_project_prompt(
    name: Optional[str] = None,
    goal: Optional[str] = None,
    deadline: Optional[str] = None,
    tasks: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    return build_project_prompt(name, goal, deadline, tasks, target_node_id)


@mcp.prompt(name="create_meeting_notes", description="Record meeting notes in Tana")
def create_meeting_notes_prompt(
    title: Optional[str] = None,
    date: Optional[str] = None,
    attendees: Optional[str] = None,
    agenda: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    return build_meeting_notes_prompt(title, date, attendees, agenda, target_node_id)


@mcp.prompt(name="create_knowledge_entry", description="Add a knowledge base entry to Tana")
def create_knowledge_entry_prompt(
    topic: Optional[str] = None,
    category: Optional[str] = None,
    content: Optional[str] = None,
    sources: Optional[str] = None,
    related_topics: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    return build_knowledge_entry_prompt(
        topic, category, content, sources, related_topics, target_node_id
    )


# === MAIN RUNNER ===

def main(config_file: Optional[str] = None, transport: str = "stdio", host: str = "127.0.0.1", port: int = 8000, path: str = "/mcp", log_level: str = "info"):
    """Main entry point for the FastMCP Tana server.

    Raises:
        ConfigError: if the configuration is invalid, e.g. no API token
    """
    global _config

    # stdout belongs to the stdio transport
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    logger.info("🚀 Starting FastMCP Tana server...")

    if config_file:
        _config = TanaMCPConfig.load(config_file)
        logger.info(f"Runtime configuration loaded from {config_file}")
    else:
        _config = _module_config
        logger.info("Using module-level configuration for runtime")

    _config.validate()
    logger.info(f"Tana Input API endpoint: {_config.endpoint}")

    if _config.get_disabled_tools():
        logger.info(f"Disabled tools: {sorted(_config.get_disabled_tools())}")
    unregister_disabled_tools(_config)

    if transport.lower() in ("http", "streamable-http", "sse"):
        logger.info(f"Starting FastMCP server with {transport} transport on {host}:{port}{path}")
        mcp.run(transport=transport.lower(), host=host, port=port, path=path, log_level=log_level)
    else:
        logger.info("Starting FastMCP server with STDIO transport")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
