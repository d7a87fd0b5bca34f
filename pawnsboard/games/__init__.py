"""
Games - Card sets and setup for playable games.

Currently supported:
- Queens (standard influence card game)
"""
