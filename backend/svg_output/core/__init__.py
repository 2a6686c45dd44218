"""Core infrastructure: settings, logging, middleware, rendering engine"""
