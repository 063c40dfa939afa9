"""Logging helpers."""

from .logging_setup import get_logger, log_operation, log_progress, setup_logging

__all__ = ['get_logger', 'log_operation', 'log_progress', 'setup_logging']
