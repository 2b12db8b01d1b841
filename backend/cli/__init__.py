"""
Command-line tools that ship alongside the game.
"""
