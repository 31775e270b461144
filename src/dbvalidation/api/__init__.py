from .error_handlers import register_exception_handlers, validation_error_handler

__all__ = ["register_exception_handlers", "validation_error_handler"]
