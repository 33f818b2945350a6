#!/usr/bin/env python3
"""
Simple runner for the FastMCP-based Tana server.
"""

import sys
import argparse
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from tana_mcp.config import ConfigError
from tana_mcp.fastmcp_server import main


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="MCP server for the Tana Input API (node creation and renaming)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  TANA_API_TOKEN      Tana Input API token (required unless set in the config file)
  TANA_API_ENDPOINT   Override the Input API endpoint

Config file (JSON or YAML, environment values take precedence):
  api_token: ...
  endpoint: https://europe-west1-tagr-prod.cloudfunctions.net/addToNodeV2
  tools:
    create_file_node: false     # not offered to clients

Examples:
  TANA_API_TOKEN=... python run_fastmcp_server.py
  python run_fastmcp_server.py --config tana-mcp.yaml
  python run_fastmcp_server.py --transport streamable-http --port 9000 --path /tana
  python run_fastmcp_server.py --log-level debug
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="JSON or YAML config file with api_token, endpoint and a tools map (default: auto-discovery, then environment)"
    )

    parser.add_argument(
        "--transport", "-t",
        type=str,
        choices=["stdio", "http", "streamable-http", "sse"],
        default="stdio",
        help="MCP transport; stdio for desktop clients, the others serve over HTTP (default: stdio)"
    )

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to for HTTP transports (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to bind to for HTTP transports (default: 8000)"
    )

    parser.add_argument(
        "--path",
        type=str,
        default="/mcp",
        help="Path for HTTP transport endpoint (default: /mcp)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level for stderr output (default: info)"
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    # stdout carries the MCP protocol on stdio, so status goes to stderr
    print("🚀 FastMCP Tana Server Starting", file=sys.stderr)
    print(f"🚀 Transport: {args.transport.upper()}", file=sys.stderr)

    try:
        main(
            config_file=args.config,
            transport=args.transport,
            host=args.host,
            port=args.port,
            path=args.path,
            log_level=args.log_level
        )
    except KeyboardInterrupt:
        print("\n👋 FastMCP server stopped by user", file=sys.stderr)
    except ConfigError as e:
        print(f"\n❌ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Server error: {e}", file=sys.stderr)
        sys.exit(1)
