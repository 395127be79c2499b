"""Core orchestration package.

Composes the image and messaging layers into the single generate-and-send
workflow used by the CLI adapter.
"""
