"""Coin Forge MCP server: Gemini-generated launch kits for new cryptocurrencies."""

__version__ = "0.1.0"
