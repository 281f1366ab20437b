"""
Shared module package.

Cross-cutting concerns used by the application:
- Error handler registration
- Security middleware
- Rate limiting
- Logging configuration
"""
