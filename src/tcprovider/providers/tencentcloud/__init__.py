"""TencentCloud resource handlers, service wrappers and their registration."""

from .registration import HandlerRegistry, register_tencentcloud_handlers

__all__ = ["HandlerRegistry", "register_tencentcloud_handlers"]
