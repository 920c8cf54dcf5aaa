"""
SSR host configuration. All environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """Application settings from environment variables."""

    # Server build output: template.html, renderfile.js, exports.js
    SSR_BUILD_DIR: str = os.environ.get("SSR_BUILD_DIR", "")

    # Node binary used to run the server bundle
    NODE_BINARY: str = os.environ.get("NODE_BINARY", "node")

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    @property
    def EXPOSE_RENDER_ERRORS(self) -> bool:
        """Show component error messages in error pages. On by default in development."""
        value = os.environ.get("EXPOSE_RENDER_ERRORS")
        if value is not None:
            return value.strip().lower() in _TRUTHY
        return self.ENVIRONMENT == "development"


# Singleton instance
settings = Settings()

# Validate required settings (skip in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if not _testing:
    if not settings.SSR_BUILD_DIR:
        raise RuntimeError("SSR_BUILD_DIR environment variable is required")
