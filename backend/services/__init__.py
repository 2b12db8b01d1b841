"""
Terminal-facing services: raw keyboard input and the ANSI renderer.
"""
