"""Process-wide configuration modules for EmpathOS.

Submodules:
- config.logging: Logging setup with a colored console handler

Import directly from submodules as needed:
  from config.logging import init_logging, get_logger
"""
