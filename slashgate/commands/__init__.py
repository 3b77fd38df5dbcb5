from .base import ECHO, FEEDBACK, TEST, register


__all__ = (
    'ECHO',
    'FEEDBACK',
    'TEST',
    'register',
)
