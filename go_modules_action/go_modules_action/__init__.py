"""
go_modules_action package.

Runtime support for the go-modules-action entry point.
"""

APP_NAME = "go-modules-action"
APP_VERSION = "v0.1.0"

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "logger",
]
