"""
Top-level package for the Discord completion relay bot.

This package hosts:
- environment loading and validation of credentials
- the HTTP client for the chat completion API
- the Discord client and its message handler
"""
