"""Command-line adapter package.

Scope:
- Argument parsing, exit codes and stdout/stderr formatting only.
- No generation or messaging logic is implemented here.
"""
