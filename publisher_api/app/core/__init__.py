"""
Cross-cutting building blocks: configuration, logging, storage,
security, validation and error mapping.
"""
