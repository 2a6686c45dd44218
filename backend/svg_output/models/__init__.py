"""Request-scoped value types and configuration records"""
