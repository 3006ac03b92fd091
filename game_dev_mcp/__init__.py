"""
Game Dev MCP Server
Turns a game concept into a Linear sprint plan and a React Three Fiber starter project
"""

__version__ = "1.0.0"
