"""
Core: application state, ports and the error taxonomy.
"""
