#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration module

Application settings, defaults and validation.
"""

from .settings import (
    AppConfig,
    CipherSettings,
    LoggingSettings,
    ProcessingSettings,
    get_app_config,
    reload_app_config,
)

__all__ = [
    "AppConfig",
    "CipherSettings",
    "ProcessingSettings",
    "LoggingSettings",
    "get_app_config",
    "reload_app_config",
]
