"""MCP Adapter Modules

This package contains MCP adapters organized by functionality:
- utils: Service wiring shared by all adapters
- streamers: Registry add/update/delete/list
- live: Live status checks against Twitch
"""
