"""Core Directory API logic, independent of the command-line front-end.

Module Structure:
    - directory/ : Directory API client, auth flow and endpoint services
"""
