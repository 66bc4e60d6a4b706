from .logging import JsonFormatter, build_log_context, configure_logging, log_event

__all__ = ["JsonFormatter", "build_log_context", "configure_logging", "log_event"]
