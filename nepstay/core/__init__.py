"""
Cross-cutting concerns: errors, logging, security, middleware and limits.
"""
