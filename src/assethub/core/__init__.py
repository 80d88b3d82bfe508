"""Core value types, errors and interfaces."""
