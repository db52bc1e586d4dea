"""
Presentation connectors (console REPL and its renderer).
"""
