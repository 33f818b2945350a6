#!/usr/bin/env python3
"""Server module for tana-mcp package.

This can be run as: python -m tana_mcp.server
"""

import sys


def main():
    """Main entry point for the FastMCP server."""
    from .config import ConfigError
    from .fastmcp_server import main as server_main

    try:
        server_main()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"❌ Server failed to start: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
