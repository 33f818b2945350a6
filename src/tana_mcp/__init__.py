"""
Tana MCP - Model Context Protocol server for the Tana Input API.

This package exposes Tana's write-only Input API as MCP tools, prompts and
documentation resources so that AI assistants can add nodes to a Tana
workspace without speaking the API directly.

Features:
- Tools for every Tana node type (plain, reference, date, url, checkbox, file, field)
- Arbitrary node trees validated against the node variants before sending
- Supertag and field definitions in the workspace schema
- Node renaming
- Prompt templates for tasks, projects, meeting notes and knowledge entries

Example usage:
    >>> from tana_mcp import TanaClient, PlainNode
    >>> client = TanaClient(api_token="your_tana_token")
    >>> await client.create_node(None, PlainNode(name="Hello from MCP"))
"""

__version__ = "1.0.0"
__author__ = "Tana MCP Contributors"
__license__ = "MIT"
__description__ = "Model Context Protocol server for the Tana Input API"

__all__ = [
    # Client
    "TanaClient",
    # Configuration
    "TanaMCPConfig",
    "ConfigError",
    # Node models
    "PlainNode",
    "ReferenceNode",
    "DateNode",
    "UrlNode",
    "BooleanNode",
    "FileNode",
    "FieldNode",
    "SupertagRef",
    "NodeResponse",
    "parse_node",
    # Exceptions
    "TanaMCPError",
    "TanaValidationError",
    "TanaAPIError",
    "TanaConnectionError",
    "NodeValidationError",
    # Version and metadata
    "__version__",
    "__author__",
    "__license__",
    "__description__",
]

from .exceptions import (
    TanaAPIError,
    TanaConnectionError,
    TanaMCPError,
    TanaValidationError,
)
from .config import ConfigError, TanaMCPConfig
from .types import (
    BooleanNode,
    DateNode,
    FieldNode,
    FileNode,
    NodeResponse,
    NodeValidationError,
    PlainNode,
    ReferenceNode,
    SupertagRef,
    UrlNode,
    parse_node,
)
from .client import TanaClient


def get_version() -> str:
    """Get the current version of tana-mcp."""
    return __version__


# Set up logging for the package
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
