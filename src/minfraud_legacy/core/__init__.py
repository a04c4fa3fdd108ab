"""Core protocol layer — attribute validation, request encoding, response decoding.

Pure functions over pydantic models; the only network code lives in
``core.clients``.
"""
