"""Tana Input API client built on httpx."""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from tana_mcp.config import DEFAULT_ENDPOINT, TanaMCPConfig
from tana_mcp.exceptions import TanaAPIError, TanaConnectionError, TanaValidationError
from tana_mcp.types import (
    MAX_NODES_PER_REQUEST,
    APIResponse,
    CreateNodesRequest,
    NodeResponse,
    SetNameRequest,
    TanaNode,
)

logger = logging.getLogger(__name__)


class TanaClient:
    """Client for the write-only Tana Input API.

    Every call is a single POST to the configured endpoint. There are no
    retries; any transport failure or non-2xx answer is raised immediately.
    """

    def __init__(
        self,
        config: Optional[TanaMCPConfig] = None,
        api_token: Optional[str] = None,
        endpoint: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Tana client.

        Args:
            config: TanaMCPConfig object (optional)
            api_token: API token, overrides the config value
            endpoint: Input API endpoint, overrides the config value
            transport: httpx transport, mainly for tests
        """
        if config is not None:
            api_token = api_token or config.api_token
            endpoint = endpoint or config.endpoint

        if not api_token:
            raise TanaValidationError("Tana API token is required")

        self.api_token = api_token
        self.endpoint = endpoint or DEFAULT_ENDPOINT
        self._transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    async def create_nodes(
        self, target_node_id: Optional[str], nodes: Sequence[TanaNode]
    ) -> List[NodeResponse]:
        """Create nodes in Tana.

        Args:
            target_node_id: Node to add the new nodes under; the workspace
                root (Library) when omitted
            nodes: Nodes to create, at most 100

        Returns:
            The created nodes, in the order they were submitted
        """
        if len(nodes) > MAX_NODES_PER_REQUEST:
            raise TanaValidationError(
                f"Maximum of {MAX_NODES_PER_REQUEST} nodes can be created in a single request, got {len(nodes)}"
            )

        request = CreateNodesRequest(target_node_id=target_node_id, nodes=list(nodes))
        response = await self._post(request.to_payload())
        return response.children

    async def create_node(
        self, target_node_id: Optional[str], node: TanaNode
    ) -> NodeResponse:
        """Create a single node and return the node Tana created."""
        created = await self.create_nodes(target_node_id, [node])
        if not created:
            raise TanaAPIError("Failed to create node: Tana returned no nodes")
        return created[0]

    async def set_node_name(self, node_id: str, new_name: str) -> NodeResponse:
        """Rename an existing node.

        Tana does not answer setName requests consistently: sometimes the
        updated node is returned, sometimes nothing. Without a returned node
        the result carries only the target id.
        """
        request = SetNameRequest(target_node_id=node_id, set_name=new_name)
        response = await self._post(request.to_payload())

        if response.children:
            return response.children[0]

        logger.debug(f"setName for {node_id} returned no node, using target id")
        return NodeResponse(node_id=node_id)

    async def _post(self, payload: Dict[str, Any]) -> APIResponse:
        """Send a request body to the Input API and parse the answer."""
        logger.debug(
            f"POST {self.endpoint} (target={payload.get('targetNodeId')}, "
            f"nodes={len(payload.get('nodes', []))})"
        )

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.endpoint, json=payload, headers=self.headers
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"Tana API error: {status} {e.response.reason_phrase}"
            logger.error(message)
            raise TanaAPIError(message, status_code=status) from e
        except httpx.RequestError as e:
            logger.error(f"Tana API request failed: {e!r}")
            raise TanaConnectionError(
                f"Tana API request failed: {str(e) or type(e).__name__}"
            ) from e

        if not response.content.strip():
            return APIResponse()

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise TanaAPIError(
                f"Tana API returned an invalid JSON body: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            logger.warning(f"Unexpected Tana API response shape: {type(data).__name__}")
            return APIResponse()

        try:
            return APIResponse.model_validate(data)
        except ValidationError as e:
            raise TanaAPIError(
                f"Tana API returned an unexpected response: {e.error_count()} invalid field(s)",
                status_code=response.status_code,
            ) from e
