"""
Web subpackage.

Development mock of the AI server.
"""
