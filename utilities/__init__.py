"""
Shared configuration and logging helpers.
"""
