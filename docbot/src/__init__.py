"""
Core package for the bot backend.

This package contains the main application logic and components including:
- Data classes for bots, messages, conversation entries and documentation
- Services for generation, storage, delivery and the conversation pipeline
- API routes, middleware and error types
"""
